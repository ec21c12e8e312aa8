import logging

import pytest

from ..resources.ABI import ERC20_ABI_JSON, ERC721_ABI_JSON


@pytest.fixture(autouse=True)
def reset_cli_logging():
    yield
    # Commands attach a RichHandler bound to the CliRunner output stream
    root_logger = logging.getLogger("nethermind")
    root_logger.handlers.clear()
    root_logger.setLevel(logging.NOTSET)


@pytest.fixture(name="corpus_dir")
def fixture_corpus_dir(tmp_path):
    corpus = tmp_path / "corpus"
    corpus.mkdir()
    (corpus / "ERC20.json").write_text(ERC20_ABI_JSON)
    (corpus / "ERC721.json").write_text(ERC721_ABI_JSON)
    return corpus
