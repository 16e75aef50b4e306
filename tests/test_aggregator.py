from umi_inspector import ByOrigin, Decoder, Identity, RawTimestampCodec, StreamAggregator
from umi_inspector.pipeline.grouping import AggregatorShard, window_key
from umi_inspector.pipeline.windowing import window_start

from records import CODE_A, CODE_B, ChunkSource, header, record

RAW = RawTimestampCodec()


def _aggregate(chunks, window_seconds=0.0, flt=None):
    source = ChunkSource(chunks)
    return source, StreamAggregator(Decoder(source, flt), codec=RAW, window_seconds=window_seconds)


def test_window_start():
    assert window_start(150.0, 100) == 100.0
    assert window_start(99.9, 100) == 0.0
    assert window_start(150.0, 0) is None
    assert window_start(150.0, None) is None


def test_window_key_uses_full_code():
    k1 = window_key(header(CODE_A), 10.0, 0)
    k2 = window_key(header(CODE_A), 20.0, 0)
    assert k1 == k2
    assert k1.identity == Identity(origin=0xAA, code=CODE_A)
    assert k1.window_start is None


def test_no_window_single_bucket_at_end():
    _, agg = _aggregate([record(CODE_A, 1000), record(CODE_A, 1010)])
    buckets = list(agg)
    assert len(buckets) == 1
    b = buckets[0]
    assert b.identity.code == CODE_A
    assert (b.count, b.total_size) == (2, 0)
    assert (b.start_time, b.end_time) == (1000.0, 1010.0)
    assert b.duration_s == 10.0
    assert b.window_start is None


def test_rollover_emits_before_next_packet_is_folded():
    source, agg = _aggregate(
        [record(CODE_A, 0), record(CODE_A, 50), record(CODE_A, 150)], window_seconds=100
    )
    it = iter(agg)
    first = next(it)
    # the third packet has been read, end of stream not yet reached
    assert source.reads == 3
    assert first.window_start == 0.0
    assert (first.count, first.start_time, first.end_time) == (2, 0.0, 50.0)

    rest = list(it)
    assert len(rest) == 1
    assert rest[0].window_start == 100.0
    assert rest[0].count == 1
    assert agg.emitted == 2


def test_shard_releases_closed_bucket():
    shard = AggregatorShard(window_seconds=100)
    assert shard.observe(header(CODE_A, length=3), 10.0) == []
    assert shard.observe(header(CODE_A, length=4), 20.0) == []
    closed = shard.observe(header(CODE_A, length=5), 120.0)
    assert len(closed) == 1
    assert (closed[0].count, closed[0].total_size) == (2, 7)
    assert shard.open_buckets == 1

    final = shard.finalize_all()
    assert [(b.window_start, b.total_size) for b in final] == [(100.0, 5)]
    assert shard.open_buckets == 0


def test_one_open_bucket_per_identity():
    shard = AggregatorShard(window_seconds=10)
    for t in range(0, 1000, 5):
        shard.observe(header(CODE_A), float(t))
        shard.observe(header(CODE_B), float(t))
        assert shard.open_buckets <= 2


def test_identities_roll_independently():
    chunks = [
        record(CODE_A, 5, b"ab"),
        record(CODE_B, 6, b"abc"),
        record(CODE_A, 15, b"a"),
        record(CODE_A, 16, b"a"),
        record(CODE_B, 25),
    ]
    _, agg = _aggregate(chunks, window_seconds=10)
    out = [(b.identity.code, b.window_start, b.count, b.total_size) for b in agg]
    assert out == [
        (CODE_A, 0.0, 1, 2),   # closed by A@15
        (CODE_B, 0.0, 1, 3),   # closed by B@25
        (CODE_A, 10.0, 2, 2),  # end of stream
        (CODE_B, 20.0, 1, 0),
    ]


def test_per_identity_windows_emitted_in_order():
    chunks = [record(CODE_A, t) for t in (1, 12, 13, 35, 36, 37)]
    _, agg = _aggregate(chunks, window_seconds=10)
    buckets = list(agg)
    assert [b.window_start for b in buckets] == [0.0, 10.0, 30.0]
    assert [b.count for b in buckets] == [1, 2, 3]


def test_aggregator_sees_only_filtered_packets():
    chunks = [record(CODE_A, 1, b"xx"), record(CODE_B, 2, b"yyy")]
    _, agg = _aggregate(chunks, flt=ByOrigin(0x0A))
    buckets = list(agg)
    assert len(buckets) == 1
    assert buckets[0].identity.code == CODE_B
    assert buckets[0].total_size == 3


def test_empty_stream():
    _, agg = _aggregate([])
    assert list(agg) == []
