from eth_abi import encode
from eth_utils import encode_hex
from eth_utils.abi import function_signature_to_4byte_selector

from nethermind.explorer_abi.decoding import decode_function_input
from nethermind.explorer_abi.registry import SignatureRegistry


def _calldata(signature: str, types: list[str], values: list) -> str:
    return encode_hex(function_signature_to_4byte_selector(signature) + encode(types, values))


def test_decode_erc20_transfer(registry, random_address):
    recipient = random_address()
    calldata = "0xa9059cbb" + encode(["address", "uint256"], [recipient, 36124523]).hex()

    decoded = decode_function_input(registry, calldata)

    assert decoded is not None
    assert decoded.name == "transfer"
    assert decoded.signature == "transfer(address,uint256)"
    assert decoded.selector == "0xa9059cbb"
    assert decoded.abi_name == "ERC20"
    assert decoded.fully_decoded

    assert [p.name for p in decoded.params] == ["recipient", "amount"]
    assert decoded.get_param("recipient").value == recipient
    assert decoded.get_param("amount").value == "36124523"


def test_decode_transfer_from(registry, random_address):
    sender, recipient = random_address(), random_address()
    calldata = _calldata(
        "transferFrom(address,address,uint256)", ["address", "address", "uint256"], [sender, recipient, 10**18]
    )

    decoded = decode_function_input(registry, calldata)

    assert decoded.selector == "0x23b872dd"
    assert decoded.get_param("sender").value == sender
    assert decoded.get_param("recipient").value == recipient
    assert decoded.get_param("amount").value == "1000000000000000000"


def test_shared_signature_uses_first_loaded_abi(registry, random_address):
    # ERC20 and ERC721 both define approve(address,uint256).  ERC20 is loaded first
    calldata = "0x095ea7b3" + encode(["address", "uint256"], [random_address(), 5]).hex()

    decoded = decode_function_input(registry, calldata)

    assert decoded.abi_name == "ERC20"
    assert [p.name for p in decoded.params] == ["spender", "amount"]


def test_decode_upper_case_calldata(registry, random_address):
    calldata = "0xA9059CBB" + encode(["address", "uint256"], [random_address(), 1]).hex().upper()

    decoded = decode_function_input(registry, calldata)

    assert decoded is not None
    assert decoded.name == "transfer"
    assert decoded.get_param("amount").value == "1"


def test_decode_bytes_calldata(registry, random_address):
    to_address = random_address()
    calldata = function_signature_to_4byte_selector("ownerOf(uint256)") + encode(["uint256"], [77])

    decoded = decode_function_input(registry, calldata)
    assert decoded.name == "ownerOf"
    assert decoded.get_param("tokenId").value == "77"

    # safeTransferFrom is overloaded, each overload has its own selector
    decoded_overload = decode_function_input(
        registry,
        _calldata(
            "safeTransferFrom(address,address,uint256,bytes)",
            ["address", "address", "uint256", "bytes"],
            [random_address(), to_address, 3, b"\xca\xfe"],
        ),
    )
    assert decoded_overload.signature == "safeTransferFrom(address,address,uint256,bytes)"
    assert decoded_overload.get_param("to").value == to_address
    assert decoded_overload.get_param("data").value == "0xcafe"


def test_decode_function_with_tuple_argument(registry):
    calldata = _calldata("setLabel((uint256,string))", ["(uint256,string)"], [(42, "hello")])

    decoded = decode_function_input(registry, calldata)

    assert decoded.signature == "setLabel((uint256,string))"
    entry = decoded.get_param("entry")
    assert entry.type == "tuple"
    assert entry.value == "(42,hello)"

    assert [(c.name, c.type, c.value) for c in entry.components] == [
        ("id", "uint256", "42"),
        ("label", "string", "hello"),
    ]


def test_decode_nested_tuples(registry, random_address):
    maker = random_address()
    calldata = _calldata(
        "submitOrder((address,(uint256,bytes)[],string),uint256)",
        ["(address,(uint256,bytes)[],string)", "uint256"],
        [(maker, [(1, b"\x01\x02"), (2, b"")], "memo"), 99],
    )

    decoded = decode_function_input(registry, calldata)
    assert decoded.fully_decoded

    order = decoded.get_param("order")
    maker_param, legs, memo = order.components

    assert maker_param.value == maker
    assert memo.value == "memo"
    assert decoded.get_param("deadline").value == "99"

    assert legs.type == "tuple[]"
    assert legs.value == "[(1,0x0102),(2,0x)]"
    assert [leg.name for leg in legs.components] == ["legs[0]", "legs[1]"]
    assert legs.components[0].type == "tuple"
    assert legs.components[0].components[1].value == "0x0102"
    assert legs.components[1].components[1].value == "0x"

    assert order.value == f"({maker},[(1,0x0102),(2,0x)],memo)"


def test_decode_static_arrays(registry, random_address):
    pool = random_address()
    calldata = _calldata(
        "setBounds(int24[2],address,bool)", ["int24[2]", "address", "bool"], [[-5, 7], pool, True]
    )

    decoded = decode_function_input(registry, calldata)

    bounds = decoded.get_param("bounds")
    assert bounds.value == "[-5,7]"
    assert [c.type for c in bounds.components] == ["int24", "int24"]

    # The static array is laid out in place, so the address follows both elements
    assert decoded.get_param("pool").value == pool
    assert decoded.get_param("enabled").value == "true"


def test_decode_static_tuple_array(registry, random_address):
    owner = random_address()
    calldata = _calldata(
        "setPoints((uint64,uint64)[2],address)", ["(uint64,uint64)[2]", "address"], [[(1, 2), (3, 4)], owner]
    )

    decoded = decode_function_input(registry, calldata)

    assert decoded.get_param("points").value == "[(1,2),(3,4)]"
    assert decoded.get_param("owner").value == owner


def test_decode_dynamic_string_array(registry):
    root = b"\x11" * 32
    calldata = _calldata("tagAll(string[],bytes32)", ["string[]", "bytes32"], [["a", "bc"], root])

    decoded = decode_function_input(registry, calldata)

    tags = decoded.get_param("tags")
    assert tags.value == "[a,bc]"
    assert [c.value for c in tags.components] == ["a", "bc"]
    assert decoded.get_param("root").value == "0x" + "11" * 32


def test_decode_truncated_calldata(registry, random_address):
    recipient = random_address()
    calldata = "0xa9059cbb" + encode(["address"], [recipient]).hex()

    decoded = decode_function_input(registry, calldata)

    assert decoded is not None
    assert not decoded.fully_decoded
    assert decoded.get_param("recipient").value == recipient
    assert decoded.get_param("amount").value is None


def test_decode_selector_without_arguments(registry):
    decoded = decode_function_input(registry, "0xa9059cbb")

    assert decoded.name == "transfer"
    assert all(p.value is None for p in decoded.params)


def test_out_of_range_offset_only_fails_dynamic_param(registry):
    selector = function_signature_to_4byte_selector("record(string,uint256)")
    calldata = selector + (0xFFFF).to_bytes(32, "big") + (7).to_bytes(32, "big")

    decoded = decode_function_input(registry, calldata)

    assert decoded.get_param("note").value is None
    assert decoded.get_param("nonce").value == "7"


def test_string_length_past_end_of_data(registry):
    selector = function_signature_to_4byte_selector("record(string,uint256)")
    calldata = (
        selector
        + (64).to_bytes(32, "big")
        + (7).to_bytes(32, "big")
        + (1000).to_bytes(32, "big")
        + b"ab".ljust(32, b"\x00")
    )

    decoded = decode_function_input(registry, calldata)

    assert decoded.get_param("note").value is None
    assert decoded.get_param("nonce").value == "7"


def test_huge_array_length_is_rejected(registry):
    selector = function_signature_to_4byte_selector("batch(uint256[])")
    calldata = selector + (32).to_bytes(32, "big") + (2**200).to_bytes(32, "big")

    decoded = decode_function_input(registry, calldata)

    assert decoded.name == "batch"
    assert decoded.get_param("amounts").value is None


def test_undecodable_calldata_returns_none(registry):
    assert decode_function_input(registry, "0xdeadbeef" + "00" * 32) is None
    assert decode_function_input(registry, "0xa905") is None
    assert decode_function_input(registry, "0x") is None
    assert decode_function_input(registry, "") is None
    assert decode_function_input(registry, "0xa9059cbz") is None
    assert decode_function_input(registry, "0xa9059cb") is None


def test_empty_registry_decodes_nothing(random_address):
    calldata = "0xa9059cbb" + encode(["address", "uint256"], [random_address(), 1]).hex()

    assert decode_function_input(SignatureRegistry.empty(), calldata) is None


def test_decoding_is_idempotent(registry, random_address):
    calldata = _calldata(
        "submitOrder((address,(uint256,bytes)[],string),uint256)",
        ["(address,(uint256,bytes)[],string)", "uint256"],
        [(random_address(), [(5, b"\xff" * 40)], "x" * 70), 1],
    )

    first = decode_function_input(registry, calldata)
    second = decode_function_input(registry, calldata)

    assert first == second
    assert first.to_dict() == second.to_dict()
