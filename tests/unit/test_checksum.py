import pytest

from gcodeblock import (
    BlockBuilder,
    ChecksumComputationFailed,
    ChecksumUnavailable,
    Gcode,
    HashEngine,
    SumChecksum,
    UInt32Address,
    XorChecksum,
    new_engine,
    parse,
)

pytestmark = pytest.mark.unit


REFERENCE_LINE = "N7 G1 X2.0 Y2.0 F3000.0"


# ----- engines -----


def test_engines_follow_protocol(xor_engine, sum_engine):
    assert isinstance(xor_engine, HashEngine)
    assert isinstance(sum_engine, HashEngine)


def test_xor_engine_reference_vector(xor_engine):
    xor_engine.update(REFERENCE_LINE.encode())
    assert xor_engine.digest() == bytes([85])


def test_sum_engine_reference_vector(sum_engine):
    sum_engine.update(REFERENCE_LINE.encode())
    assert sum_engine.digest() == bytes([sum(REFERENCE_LINE.encode()) % 256])


def test_engines_accumulate_and_reset(xor_engine, sum_engine):
    for engine in (xor_engine, sum_engine):
        engine.update(b"N7 G1 ")
        engine.update(b"X2.0 Y2.0 F3000.0")
        chunked = engine.digest()
        engine.reset()
        engine.update(REFERENCE_LINE.encode())
        assert engine.digest() == chunked
        engine.reset()
        assert engine.digest() == b"\x00"
        engine.update(b"")
        assert engine.digest() == b"\x00"


def test_new_engine():
    assert isinstance(new_engine("xor"), XorChecksum)
    assert isinstance(new_engine(" SUM "), SumChecksum)
    with pytest.raises(ValueError):
        new_engine("crc")


# ----- block checksum -----


def test_calculate_checksum_reference():
    block = parse(REFERENCE_LINE)
    gc = block.calculate_checksum()
    assert gc.address() == 85
    assert gc.to_string() == "*85"
    assert isinstance(gc.typed_address(), UInt32Address)
    # calculation alone does not store the checksum
    assert block.checksum() is None


def test_calculate_checksum_is_deterministic():
    block = parse(REFERENCE_LINE)
    assert block.calculate_checksum().compare(block.calculate_checksum())


def test_checksum_ignores_stored_checksum_and_comment():
    plain = parse(REFERENCE_LINE)
    decorated = parse(REFERENCE_LINE + "*12 ;a comment")
    assert decorated.calculate_checksum().compare(plain.calculate_checksum())


def test_update_checksum_is_idempotent():
    block = parse(REFERENCE_LINE)
    block.update_checksum()
    c1 = block.checksum()
    block.update_checksum()
    c2 = block.checksum()
    assert c1.compare(c2)
    assert block.to_line_with_check() == REFERENCE_LINE + " *85"


def test_verify_checksum():
    assert parse(REFERENCE_LINE + "*85").verify_checksum() is True
    assert parse(REFERENCE_LINE + " *84").verify_checksum() is False


def test_verify_without_checksum_raises():
    with pytest.raises(ChecksumUnavailable):
        parse(REFERENCE_LINE).verify_checksum()


def test_verify_after_update():
    block = parse("N3 T0 ;tool")
    block.update_checksum()
    assert block.verify_checksum() is True
    reparsed = parse(block.to_string())
    assert reparsed.verify_checksum() is True


def test_sum_engine_block():
    block = parse(REFERENCE_LINE, hash_engine=SumChecksum())
    assert block.calculate_checksum().address() == sum(REFERENCE_LINE.encode()) % 256


class _BrokenEngine:
    def reset(self):
        pass

    def update(self, data):
        raise OSError("device gone")

    def digest(self):
        return b""


class _EmptyEngine:
    def reset(self):
        pass

    def update(self, data):
        pass

    def digest(self):
        return b""


@pytest.mark.parametrize("engine", [_BrokenEngine(), _EmptyEngine()])
def test_engine_failures_are_wrapped(engine):
    block = BlockBuilder(Gcode("G")).with_hash_engine(engine).build()
    with pytest.raises(ChecksumComputationFailed) as exc:
        block.calculate_checksum()
    assert exc.value.cause is not None
    with pytest.raises(ChecksumComputationFailed):
        block.update_checksum()
    assert block.checksum() is None
