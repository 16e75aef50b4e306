import pytest

from umi_inspector import ByCodeSet, Decoder, EndOfStream, IdentityFilter, ShortBufferError

from records import CODE_A, CODE_B, ChunkSource, record


def test_decode_then_end_of_stream():
    d = Decoder(ChunkSource([record(CODE_A, 1), record(CODE_B, 2)]))
    assert d.decode().header.coarse == 1
    assert d.decode().header.coarse == 2
    with pytest.raises(EndOfStream):
        d.decode()


def test_filter_is_transparent_and_keeps_order():
    chunks = [record(c, t) for t, c in enumerate([CODE_A, CODE_B, CODE_B, CODE_A, CODE_B])]
    d = Decoder(ChunkSource(chunks), ByCodeSet([CODE_B]))
    assert [p.header.coarse for p in d] == [1, 2, 4]
    assert d.metrics() == {"packets_read": 5, "packets_accepted": 3, "packets_rejected": 2}


def test_long_rejected_run_does_not_recurse():
    chunks = [record(CODE_A, t) for t in range(5000)] + [record(CODE_B, 9)]
    d = Decoder(ChunkSource(chunks), ByCodeSet([CODE_B]))
    assert d.decode().header.coarse == 9


def test_payload_capture():
    d = Decoder(ChunkSource([record(CODE_A, 1, b"hello")]))
    assert d.decode(True).data == b"hello"


def test_decode_error_propagates():
    d = Decoder(ChunkSource([record(CODE_A, 1), b"\x00" * 10, record(CODE_A, 2)]))
    d.decode()
    with pytest.raises(ShortBufferError):
        d.decode()


def test_filter_error_propagates_immediately():
    class Broken(IdentityFilter):
        def accept(self, header):
            raise RuntimeError("catalog unavailable")

    source = ChunkSource([record(CODE_A, 1), record(CODE_A, 2)])
    d = Decoder(source, Broken())
    with pytest.raises(RuntimeError):
        d.decode()
    assert source.reads == 1


def test_buffer_size_passed_to_source():
    sizes = []

    class Recording(ChunkSource):
        def read(self, size=-1):
            sizes.append(size)
            return super().read(size)

    list(Decoder(Recording([record(CODE_A)]), buffer_size=512))
    assert sizes == [512, 512]
