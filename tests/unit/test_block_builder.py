import pytest

from gcodeblock import (
    AddressableGcode,
    Block,
    BlockBuilder,
    BlockConfigurationInvalid,
    BlockConfigurationNil,
    BlockMissingCommand,
    Gcode,
    GcodeFactory,
    Int32Address,
    UInt32Address,
    XorChecksum,
    parse,
)

pytestmark = pytest.mark.unit


TEMPLATE = "%l %c %p%k %m"


def _builder(sample_gcodes, sections):
    builder = BlockBuilder(sample_gcodes["command"])
    for name in sections:
        getattr(builder, f"with_{name}")(sample_gcodes[name])
    return builder


@pytest.mark.parametrize(
    "sections,expected",
    [
        ([], "G92"),
        (["line_number"], "N4 G92"),
        (["line_number", "parameters"], "N4 G92 E0"),
        (["line_number", "parameters", "checksum"], "N4 G92 E0 *67"),
        (["line_number", "parameters", "checksum", "comment"], "N4 G92 E0 *67 ;comentario"),
    ],
)
def test_builder_sections(sample_gcodes, sections, expected):
    block = _builder(sample_gcodes, sections).build()
    assert block.to_string() == expected


def test_builder_full_template(sample_gcodes):
    block = (
        _builder(sample_gcodes, ["line_number", "parameters", "checksum", "comment"])
        .with_hash_engine(XorChecksum())
        .with_factory(GcodeFactory())
        .build()
    )
    assert block.format(TEMPLATE) == "N4 G92 E0*67 ;comentario"
    assert block.format("%c%%") == "G92%"


@pytest.mark.parametrize("setter", ["line_number", "parameters", "checksum", "comment", "hash_engine", "factory"])
def test_builder_rejects_none(sample_gcodes, setter):
    builder = BlockBuilder(sample_gcodes["command"])
    with pytest.raises(BlockConfigurationNil) as exc:
        getattr(builder, f"with_{setter}")(None)
    assert exc.value.field == setter


def test_builder_requires_command():
    with pytest.raises(BlockMissingCommand):
        BlockBuilder(None).build()


def test_builder_is_all_or_nothing(sample_gcodes):
    builder = (
        BlockBuilder(sample_gcodes["command"])
        .with_line_number(sample_gcodes["line_number"])
        # checksum keyed with the wrong word
        .with_checksum(AddressableGcode("K", UInt32Address(1)))
    )
    block = None
    with pytest.raises(BlockConfigurationInvalid) as exc:
        block = builder.build()
    assert block is None
    assert exc.value.field == "checksum"


@pytest.mark.parametrize(
    "line_number",
    [
        AddressableGcode("N", Int32Address(4)),
        AddressableGcode("M", UInt32Address(4)),
        Gcode("N"),
    ],
)
def test_builder_checks_line_number_keying(sample_gcodes, line_number):
    with pytest.raises(BlockConfigurationInvalid):
        BlockBuilder(sample_gcodes["command"]).with_line_number(line_number).build()


def test_builder_rejects_foreign_objects(sample_gcodes):
    with pytest.raises(BlockConfigurationInvalid):
        BlockBuilder(sample_gcodes["command"]).with_parameters(["X1"]).build()
    with pytest.raises(BlockConfigurationInvalid):
        BlockBuilder(sample_gcodes["command"]).with_hash_engine(object()).build()
    with pytest.raises(BlockConfigurationInvalid):
        BlockBuilder(sample_gcodes["command"]).with_factory(object()).build()
    with pytest.raises(BlockConfigurationInvalid):
        BlockBuilder("G1").build()  # type: ignore[arg-type]


def test_staged_actions_apply_in_order(sample_gcodes):
    first = [AddressableGcode("X", Int32Address(1))]
    second = [AddressableGcode("Y", Int32Address(2))]
    block = BlockBuilder(sample_gcodes["command"]).with_parameters(first).with_parameters(second).build()
    assert block.to_line() == "G92 Y2"


def test_accessors(sample_gcodes):
    block = _builder(sample_gcodes, ["line_number", "parameters", "checksum", "comment"]).build()
    assert block.line_number() is sample_gcodes["line_number"]
    assert block.command() is sample_gcodes["command"]
    assert block.parameters() == tuple(sample_gcodes["parameters"])
    assert block.checksum() is sample_gcodes["checksum"]
    assert block.comment() == ";comentario"
    assert isinstance(block.hash_engine(), XorChecksum)
    assert isinstance(block.factory(), GcodeFactory)


def test_export_levels_are_nested(sample_gcodes):
    block = _builder(sample_gcodes, ["line_number", "parameters", "checksum", "comment"]).build()
    assert block.to_line() == "N4 G92 E0"
    assert block.to_line_with_check() == "N4 G92 E0 *67"
    assert block.to_line_with_check_and_comments() == "N4 G92 E0 *67 ;comentario"
    assert str(block) == block.to_string() == block.to_line_with_check_and_comments()


def test_block_constructor_direct(sample_gcodes):
    block = Block(Gcode("M"), parameters=[Gcode("X")])
    assert block.to_line() == "M X"
    assert block.line_number() is None
    assert block.checksum() is None
    assert block.comment() == ""
    with pytest.raises(BlockMissingCommand):
        Block(None)  # type: ignore[arg-type]


@pytest.mark.parametrize("comment", ["hello", ";hello"])
def test_comment_gets_leading_semicolon(comment):
    block = BlockBuilder(Gcode("G")).with_comment(comment).build()
    assert block.comment() == ";hello"
    assert block.to_string() == "G ;hello"

    reparsed = parse(block.to_string())
    assert reparsed.comment() == ";hello"
    assert reparsed.parameters() == ()
    assert reparsed.to_string() == block.to_string()
