import json
import random

import pytest

from nethermind.explorer_abi.decoding import ExplorerDecoder
from nethermind.explorer_abi.registry import RegistryBuilder, SignatureRegistry

from .resources.ABI import ERC20_ABI_JSON, ERC721_ABI_JSON, ORDER_BOOK_ABI_JSON, TOKEN_HOME_ABI_JSON


@pytest.fixture(name="random_address")
def fixture_random_address():
    def _generate_random_address() -> str:
        return "0x" + random.randbytes(20).hex()

    return _generate_random_address


@pytest.fixture(name="erc20_abi")
def fixture_erc20_abi() -> list[dict]:
    return json.loads(ERC20_ABI_JSON)


@pytest.fixture(name="erc721_abi")
def fixture_erc721_abi() -> list[dict]:
    return json.loads(ERC721_ABI_JSON)


@pytest.fixture(name="registry")
def fixture_registry() -> SignatureRegistry:
    builder = RegistryBuilder()
    builder.add_abi_json("ERC20", ERC20_ABI_JSON)
    builder.add_abi_json("ERC721", ERC721_ABI_JSON)
    builder.add_abi_json("TokenHome", TOKEN_HOME_ABI_JSON)
    builder.add_abi_json("OrderBook", ORDER_BOOK_ABI_JSON)
    return builder.build()


@pytest.fixture(name="decoder")
def fixture_decoder(registry: SignatureRegistry) -> ExplorerDecoder:
    return ExplorerDecoder(registry)
