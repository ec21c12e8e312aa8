from click.testing import CliRunner
from eth_abi import encode
from eth_utils import encode_hex

from nethermind.explorer_abi.cli import explorer_abi_cli
from nethermind.explorer_abi.registry import load_registry

TRANSFER_TOPIC = "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"


def test_registry_build(corpus_dir, tmp_path):
    output = tmp_path / "registry.json"
    (corpus_dir / "broken.json").write_text("not json")

    runner = CliRunner()
    result = runner.invoke(explorer_abi_cli, ["registry", "build", str(corpus_dir), str(output)])

    assert result.exit_code == 0, result.output
    assert "Built registry from 2 ABIs" in result.output
    assert "Skipped 1 documents" in result.output

    registry = load_registry(output)
    assert registry.function_count == 13
    assert registry.abi_names == ["ERC20", "ERC721"]


def test_registry_list(corpus_dir, tmp_path):
    runner = CliRunner()
    result = runner.invoke(explorer_abi_cli, ["registry", "list", "--corpus", str(corpus_dir)])

    assert result.exit_code == 0, result.output
    assert "Signature Registry" in result.output
    assert "ERC20" in result.output
    assert "ERC721" in result.output

    empty_dir = tmp_path / "empty"
    empty_dir.mkdir()
    empty_result = runner.invoke(explorer_abi_cli, ["registry", "list", "--corpus", str(empty_dir)])

    assert empty_result.exit_code == 0
    assert "Registry is empty" in empty_result.output


def test_decode_input(corpus_dir, random_address):
    calldata = "0xa9059cbb" + encode(["address", "uint256"], [random_address(), 36124523]).hex()

    runner = CliRunner()
    result = runner.invoke(explorer_abi_cli, ["decode", "input", "--corpus", str(corpus_dir), calldata])

    assert result.exit_code == 0, result.output
    assert '"name": "transfer"' in result.output
    assert '"value": "36124523"' in result.output


def test_decode_input_from_registry_artifact(corpus_dir, tmp_path, random_address):
    runner = CliRunner()
    registry_path = tmp_path / "registry.json"
    runner.invoke(explorer_abi_cli, ["registry", "build", str(corpus_dir), str(registry_path)])

    calldata = "0x095ea7b3" + encode(["address", "uint256"], [random_address(), 1]).hex()
    result = runner.invoke(explorer_abi_cli, ["decode", "input", "-r", str(registry_path), calldata])

    assert result.exit_code == 0, result.output
    assert '"name": "approve"' in result.output
    assert '"abi_name": "ERC20"' in result.output


def test_decode_unknown_input(corpus_dir):
    runner = CliRunner()
    result = runner.invoke(explorer_abi_cli, ["decode", "input", "-c", str(corpus_dir), "0xdeadbeef"])

    assert result.exit_code == 0
    assert "not decodable" in result.output


def test_decode_malformed_input(corpus_dir):
    runner = CliRunner()

    for calldata in ["0xa905", "0xzz059cbb", "not calldata"]:
        result = runner.invoke(explorer_abi_cli, ["decode", "input", "-c", str(corpus_dir), calldata])

        assert result.exit_code == 0, result.output
        assert "not decodable" in result.output
        assert "Selector" not in result.output


def test_decode_log(corpus_dir, random_address):
    sender = random_address()
    runner = CliRunner()
    result = runner.invoke(
        explorer_abi_cli,
        [
            "decode",
            "log",
            "--corpus",
            str(corpus_dir),
            "-t",
            TRANSFER_TOPIC,
            "-t",
            "0x" + sender[2:].rjust(64, "0"),
            "-t",
            "0x" + random_address()[2:].rjust(64, "0"),
            "--data",
            encode_hex(encode(["uint256"], [1000])),
        ],
    )

    assert result.exit_code == 0, result.output
    assert '"name": "Transfer"' in result.output
    assert f'"value": "{sender}"' in result.output
    assert '"value": "1000"' in result.output

    unknown = runner.invoke(explorer_abi_cli, ["decode", "log", "-c", str(corpus_dir), "-t", "0x" + "00" * 32])
    assert unknown.exit_code == 0
    assert "not decodable" in unknown.output


def test_missing_registry_artifact(tmp_path):
    runner = CliRunner()
    result = runner.invoke(
        explorer_abi_cli, ["decode", "input", "--registry", str(tmp_path / "missing.json"), "0xa9059cbb"]
    )

    assert result.exit_code == 1
    assert "Could not read signature registry" in result.output
