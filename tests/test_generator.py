import re
import threading
from collections import Counter

import pytest

from tokengen import generator as generator_mod
from tokengen import hashing
from tokengen.counter import MonotonicCounter
from tokengen.errors import (
    AlgorithmUnavailableError,
    ConfigurationError,
    InvalidFingerprintError,
    InvalidLengthError,
    UnsupportedAlgorithmError,
)
from tokengen.generator import TokenGenerator, is_token
from tokengen.schema import MAX_LENGTH, GeneratorConfig


def test_default_token_format():
    token = TokenGenerator().generate()
    assert re.fullmatch(r"[a-z][0-9a-z]{23}", token)


@pytest.mark.parametrize("algorithm", ["sha3-256", "SHA-256"])
@pytest.mark.parametrize("length", range(24, 33))
def test_every_configuration_produces_valid_tokens(length, algorithm):
    gen = TokenGenerator(length=length, fingerprint="test-host", algorithm=algorithm)
    pattern = re.compile(r"[a-z][0-9a-z]{%d}" % (length - 1))
    for _ in range(200):
        token = gen.generate()
        assert len(token) == length
        assert pattern.fullmatch(token)


def test_configuration_is_exposed_read_only():
    gen = TokenGenerator(length=30, fingerprint="fp-1", algorithm="SHA-256")
    assert (gen.length, gen.fingerprint, gen.algorithm) == (30, "fp-1", "sha-256")
    with pytest.raises(AttributeError):
        gen.length = 25


def test_default_fingerprint_is_not_empty():
    assert TokenGenerator().fingerprint


@pytest.mark.parametrize("length", [23, 33, 24.5, "24", None])
def test_invalid_length_fails_construction(length):
    with pytest.raises(InvalidLengthError):
        TokenGenerator(length=length)


def test_empty_fingerprint_fails_construction():
    with pytest.raises(InvalidFingerprintError):
        TokenGenerator(fingerprint="")


@pytest.mark.parametrize("algorithm", ["md5", "sha1", "SHA3-512"])
def test_unsupported_algorithm_fails_construction(algorithm):
    with pytest.raises(UnsupportedAlgorithmError):
        TokenGenerator(algorithm=algorithm)


def test_unavailable_algorithm_fails_construction(monkeypatch):
    real_new = hashing.hashlib.new

    def fake_new(name, *args, **kwargs):
        if name == "sha3_256":
            raise ValueError("unsupported hash type")
        return real_new(name, *args, **kwargs)

    monkeypatch.setattr(hashing.hashlib, "new", fake_new)
    with pytest.raises(AlgorithmUnavailableError):
        TokenGenerator()
    # Falling back to the alternate algorithm works
    assert TokenGenerator(algorithm="sha-256").generate()


def test_from_config():
    config = GeneratorConfig.from_mapping({"length": 26, "fingerprint": "cfg"})
    gen = TokenGenerator.from_config(config)
    assert gen.length == 26
    assert gen.fingerprint == "cfg"
    assert len(gen.generate()) == 26


def test_generate_advances_counter_once_per_token(monkeypatch):
    created = []

    class RecordingCounter(MonotonicCounter):
        def __init__(self, initial=None):
            super().__init__(initial)
            self.calls = 0
            created.append(self)

        def next(self):
            self.calls += 1
            return super().next()

    monkeypatch.setattr(generator_mod, "MonotonicCounter", RecordingCounter)
    gen = TokenGenerator(fingerprint="fp")
    for _ in range(5):
        gen.generate()
    assert len(created) == 1
    assert created[0].calls == 5


def test_instances_own_separate_counters():
    g1 = TokenGenerator(fingerprint="fp")
    g2 = TokenGenerator(fingerprint="fp")
    assert g1._counter is not g2._counter


def test_identical_configuration_gives_valid_but_distinct_tokens():
    g1 = TokenGenerator(length=24, fingerprint="same", algorithm="sha3-256")
    g2 = TokenGenerator(length=24, fingerprint="same", algorithm="sha3-256")
    t1, t2 = g1.generate(), g2.generate()
    assert is_token(t1, 24) and is_token(t2, 24)
    assert t1 != t2


def test_no_duplicates_in_100k_tokens():
    gen = TokenGenerator()
    tokens = {gen.generate() for _ in range(100_000)}
    assert len(tokens) == 100_000


def test_numeric_suffix_buckets_are_roughly_uniform():
    gen = TokenGenerator()
    # 200k draws put 10,000 in each bucket with a standard deviation near 100,
    # so the 10% band is about ten deviations wide.
    n, buckets = 200_000, 20
    counts = Counter(int(gen.generate()[1:], 36) % buckets for _ in range(n))
    expected = n / buckets
    assert len(counts) == buckets
    for bucket, count in counts.items():
        assert abs(count - expected) <= expected * 0.10, (bucket, count)


def test_prefix_letters_are_spread_across_alphabet():
    gen = TokenGenerator()
    letters = Counter(gen.generate()[0] for _ in range(26_000))
    assert len(letters) == 26
    assert min(letters.values()) > 600


def test_concurrent_generate_never_reuses_counter_value(monkeypatch):
    seen = []
    seen_lock = threading.Lock()

    class RecordingCounter(MonotonicCounter):
        def next(self):
            value = super().next()
            with seen_lock:
                seen.append(value)
            return value

    monkeypatch.setattr(generator_mod, "MonotonicCounter", RecordingCounter)
    gen = TokenGenerator()
    tokens = []
    tokens_lock = threading.Lock()

    def worker():
        local = [gen.generate() for _ in range(500)]
        with tokens_lock:
            tokens.extend(local)

    threads = [threading.Thread(target=worker) for _ in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(seen) == 16 * 500
    assert len(set(seen)) == len(seen)
    assert len(set(tokens)) == len(tokens)
    assert all(is_token(t, 24) for t in tokens)


@pytest.mark.parametrize("value, length, expected", [
    ("a" + "0" * 23, None, True),
    ("z" + "9" * 31, None, True),
    ("a" + "0" * 23, 24, True),
    ("a" + "0" * 23, 25, False),
    ("1" + "0" * 23, None, False),
    ("A" + "0" * 23, None, False),
    ("a" + "0" * 22 + "-", None, False),
    ("a" * 23, None, False),
    ("a" * 33, None, False),
    (None, None, False),
    (12345, None, False),
])
def test_is_token(value, length, expected):
    assert is_token(value, length) is expected


def test_repr_omits_fingerprint():
    gen = TokenGenerator(fingerprint="secret-host")
    assert "secret-host" not in repr(gen)
    assert "sha3-256" in repr(gen)


def test_from_config_revalidates_unchecked_config():
    unchecked = GeneratorConfig.model_construct(length=100, fingerprint="fp", algorithm="sha3-256")
    with pytest.raises(InvalidLengthError):
        TokenGenerator.from_config(unchecked)


def test_from_config_rejects_other_objects():
    with pytest.raises(ConfigurationError):
        TokenGenerator.from_config({"length": 24})


def test_entropy_block_is_twice_the_longest_token():
    gen = TokenGenerator(fingerprint="fp")
    assert generator_mod.ENTROPY_BYTES == 2 * MAX_LENGTH
    assert gen._engine.entropy_bytes == 2 * MAX_LENGTH


def test_random_source_failure_propagates(monkeypatch):
    gen = TokenGenerator(fingerprint="fp")

    def failing_bytes(n):
        raise OSError("entropy source unavailable")

    monkeypatch.setattr(hashing, "secure_random_bytes", failing_bytes)
    with pytest.raises(OSError, match="entropy source unavailable"):
        gen.generate()


def test_hash_failure_propagates(monkeypatch):
    gen = TokenGenerator(fingerprint="fp")

    def failing_new(name, *args, **kwargs):
        raise MemoryError("out of memory")

    monkeypatch.setattr(hashing.hashlib, "new", failing_new)
    with pytest.raises(MemoryError):
        gen.generate()
