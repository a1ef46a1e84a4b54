"""
Merkle Root Derivation Unit Tests
Tests for core/merkle/merkle_tree.py

Required behavior:
1. Fixed vectors reproduce byte for byte under every strategy
2. Invalid arguments are all reported together, before any work
3. Deadline misses surface as ProcessTimedOutException
4. The caller's leaves are never mutated
"""
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from core.crypto.hashing import digest_size, list_algorithms, sha256
from core.merkle import reducers
from core.merkle.merkle_tree import (
    MerkleSession,
    derive_root,
    validate_request,
    verify_root,
)
from core.merkle.process_types import ProcessType
from core.schemas.errors import (
    ArgumentException,
    ErrorCodes,
    ProcessTimedOutException,
    ProofMismatchException,
)

from fixtures.common import PROOF_SENTENCE, make_leaves


class TestKnownVectors:
    """The proof sentence vectors, one per strategy."""

    @pytest.mark.parametrize("process_type", list(ProcessType))
    def test_vector(self, proof_leaves, proof_roots, process_type):
        root = derive_root(proof_leaves, "SHA256", process_type)
        assert root == proof_roots[process_type]

    def test_vectors_are_distinct(self, proof_roots):
        assert len(set(proof_roots.values())) == 3

    @pytest.mark.parametrize("process_type", list(ProcessType))
    def test_initial_hash_over_raw_words(self, proof_roots, process_type):
        words = [w.encode() for w in PROOF_SENTENCE.split(" ")]
        root = derive_root(words, "SHA256", process_type, initial_hash=True)
        assert root == proof_roots[process_type]

    @pytest.mark.parametrize("process_type", [0, 1, 2, "PASS_THROUGH", "dupe-append", "BIN-TREE", "2"])
    def test_process_type_forms(self, proof_leaves, proof_roots, process_type):
        expected = proof_roots[ProcessType.parse(process_type)]
        assert derive_root(proof_leaves, "sha256", process_type) == expected


class TestDerivation:
    """General derivation properties."""

    def test_power_of_two_count_agrees_across_strategies(self):
        leaves = make_leaves(4)
        roots = {derive_root(leaves, "SHA256", pt) for pt in ProcessType}
        assert len(roots) == 1

    @pytest.mark.parametrize("process_type", list(ProcessType))
    def test_deterministic(self, process_type):
        leaves = make_leaves(11)
        first = derive_root(leaves, "SHA256", process_type)
        assert all(
            derive_root(leaves, "SHA256", process_type) == first
            for _ in range(5)
        )

    @pytest.mark.parametrize("algorithm", [a for a in list_algorithms() if a != "NOP"])
    @pytest.mark.parametrize("process_type", list(ProcessType))
    def test_root_length_matches_digest_size(self, algorithm, process_type):
        leaves = [b"a", b"b", b"c", b"d", b"e"]
        root = derive_root(leaves, algorithm, process_type, initial_hash=True)
        assert len(root) == digest_size(algorithm)

    @pytest.mark.parametrize("process_type", list(ProcessType))
    def test_caller_leaves_not_mutated(self, process_type):
        leaves = make_leaves(7)
        snapshot = list(leaves)
        derive_root(leaves, "SHA256", process_type, initial_hash=True)
        assert leaves == snapshot

    def test_bytearray_and_memoryview_leaves(self, proof_leaves, proof_roots):
        mixed = [bytearray(proof_leaves[0]), memoryview(proof_leaves[1])] + proof_leaves[2:]
        root = derive_root(mixed, "SHA256", ProcessType.BINARY_TREE)
        assert root == proof_roots[ProcessType.BINARY_TREE]

    def test_single_leaf_pass_through(self):
        (leaf,) = make_leaves(1)
        assert derive_root([leaf], "SHA256", ProcessType.PASS_THROUGH) == leaf

    @pytest.mark.parametrize("process_type", [ProcessType.DUPE_APPEND, ProcessType.BINARY_TREE])
    def test_single_leaf_self_combines(self, process_type):
        (leaf,) = make_leaves(1)
        assert derive_root([leaf], "SHA256", process_type) == sha256(leaf + leaf)

    def test_nop_concatenates(self):
        root = derive_root([b"a", b"b", b"c"], "NOP", ProcessType.PASS_THROUGH)
        assert root == b"abc"

    @pytest.mark.slow
    @pytest.mark.parametrize("process_type", list(ProcessType))
    def test_ten_thousand_leaves(self, process_type):
        root = derive_root(make_leaves(10_000), "SHA256", process_type)
        assert len(root) == 32


class TestValidation:
    """Argument errors are collected and reported together."""

    def test_valid_request(self):
        name, pt = validate_request(make_leaves(2), "sha3-256", "1")
        assert name == "SHA3_256"
        assert pt is ProcessType.DUPE_APPEND

    def test_empty_leaves(self):
        with pytest.raises(ArgumentException) as exc_info:
            derive_root([], "SHA256", ProcessType.DUPE_APPEND)
        assert exc_info.value.codes == [ErrorCodes.EMPTY_INPUT]

    def test_unknown_algorithm(self, proof_leaves):
        with pytest.raises(ArgumentException) as exc_info:
            derive_root(proof_leaves, "NOTAREALALGO", ProcessType.DUPE_APPEND)
        assert exc_info.value.codes == [ErrorCodes.UNKNOWN_ALGORITHM]

    @pytest.mark.parametrize("bad", [99, -1, 3, True, "SIDEWAYS", None, 1.5, "--1", "²", "1٢", "+-1", ""])
    def test_invalid_process_type(self, proof_leaves, bad):
        with pytest.raises(ArgumentException) as exc_info:
            derive_root(proof_leaves, "SHA256", bad)
        assert exc_info.value.codes == [ErrorCodes.INVALID_PROCESS_TYPE]

    def test_invalid_leaf_type(self):
        with pytest.raises(ArgumentException) as exc_info:
            derive_root([b"ok", "text", 7], "SHA256", 0)

        error = exc_info.value
        assert error.codes == [ErrorCodes.INVALID_LEAF, ErrorCodes.INVALID_LEAF]
        assert [v.index for v in error.violations] == [1, 2]

    def test_all_violations_reported_at_once(self):
        with pytest.raises(ArgumentException) as exc_info:
            derive_root([], "NOTAREALALGO", 99)

        error = exc_info.value
        assert error.code == ErrorCodes.ARGUMENT_ERROR
        assert error.codes == [
            ErrorCodes.EMPTY_INPUT,
            ErrorCodes.UNKNOWN_ALGORITHM,
            ErrorCodes.INVALID_PROCESS_TYPE,
        ]
        assert "argument error" in error.message
        assert len(error.details["violations"]) == 3

    def test_validation_runs_before_reduction(self, monkeypatch):
        calls = []

        def spy(leaves, hash_func):
            calls.append(len(leaves))
            return b""

        monkeypatch.setitem(reducers.REDUCERS, ProcessType.DUPE_APPEND, spy)
        with pytest.raises(ArgumentException):
            derive_root([b"a"], "NOTAREALALGO", ProcessType.DUPE_APPEND)
        assert calls == []


class TestDeadline:
    """Reductions that miss their deadline."""

    def test_timeout_raises(self, monkeypatch):
        release = threading.Event()

        def stalled(leaves, hash_func):
            release.wait(5)
            return b""

        monkeypatch.setitem(reducers.REDUCERS, ProcessType.BINARY_TREE, stalled)
        try:
            with pytest.raises(ProcessTimedOutException) as exc_info:
                derive_root(make_leaves(4), "SHA256", ProcessType.BINARY_TREE, timeout_ms=20)
        finally:
            release.set()

        assert exc_info.value.details["process"] == "BIN-TREE"
        assert exc_info.value.retryable

    def test_explicit_timeout_overrides_config(self, proof_leaves, proof_roots):
        root = derive_root(proof_leaves, "SHA256", ProcessType.DUPE_APPEND, timeout_ms=5000)
        assert root == proof_roots[ProcessType.DUPE_APPEND]


class TestVerifyRoot:
    """Recompute-and-compare."""

    def test_match_returns_root(self, proof_leaves, proof_roots):
        expected = proof_roots[ProcessType.PASS_THROUGH]
        assert verify_root(proof_leaves, "SHA256", ProcessType.PASS_THROUGH, expected) == expected

    def test_mismatch_raises(self, proof_leaves, proof_roots):
        wrong = proof_roots[ProcessType.DUPE_APPEND]
        with pytest.raises(ProofMismatchException) as exc_info:
            verify_root(proof_leaves, "SHA256", ProcessType.PASS_THROUGH, wrong)

        error = exc_info.value
        assert error.code == ErrorCodes.ROOT_MISMATCH
        assert error.expected == wrong
        assert error.actual == proof_roots[ProcessType.PASS_THROUGH]
        assert error.details["actual"] == proof_roots[ProcessType.PASS_THROUGH].hex()

    def test_truncated_root_mismatches(self, proof_leaves, proof_roots):
        expected = proof_roots[ProcessType.BINARY_TREE]
        with pytest.raises(ProofMismatchException):
            verify_root(proof_leaves, "SHA256", ProcessType.BINARY_TREE, expected[:16])


class TestMerkleSession:
    """Per-call session state."""

    def test_open_resolves_arguments(self, proof_leaves):
        session = MerkleSession.open(proof_leaves, "sha256sum256", "pas-thru")
        assert session.current_algorithm == "SHA256"
        assert session.process_type is ProcessType.PASS_THROUGH
        assert session.root is None

    def test_open_copies_leaves(self):
        leaves = [bytearray(b"abc")]
        session = MerkleSession.open(leaves, "SHA256", 0)
        leaves[0][0] = 0
        assert session.leaves == [b"abc"]

    def test_encode_leaves_runs_once(self):
        session = MerkleSession.open([b"a", b"b"], "SHA256", 1)
        session.encode_leaves()
        session.encode_leaves()
        assert session.leaves == [sha256(b"a"), sha256(b"b")]

    def test_run_records_root(self, proof_leaves, proof_roots):
        session = MerkleSession.open(proof_leaves, "SHA256", ProcessType.DUPE_APPEND)
        root = session.run()
        assert root == session.root == proof_roots[ProcessType.DUPE_APPEND]

    def test_run_with_initial_hash_is_stable(self):
        session = MerkleSession.open([b"a", b"b", b"c"], "SHA256", 2, initial_hash=True)
        assert session.run() == session.run()


class TestConcurrentCalls:
    """Simultaneous derivations share no state."""

    def test_parallel_roots_match_serial(self):
        jobs = [
            (make_leaves(count, prefix=f"set{count}-"), algorithm, process_type, initial_hash)
            for count in (1, 2, 5, 7, 16, 33)
            for algorithm in ("SHA256", "SHA3_256", "MD5")
            for process_type in ProcessType
            for initial_hash in (False, True)
        ]
        serial = [derive_root(*job) for job in jobs]

        with ThreadPoolExecutor(max_workers=8) as pool:
            parallel = list(pool.map(lambda job: derive_root(*job), jobs))

        assert parallel == serial

    def test_parallel_shared_leaf_list_untouched(self, proof_leaves, proof_roots):
        snapshot = list(proof_leaves)

        def derive(process_type):
            return derive_root(proof_leaves, "SHA256", process_type, initial_hash=False)

        with ThreadPoolExecutor(max_workers=6) as pool:
            roots = list(pool.map(derive, list(ProcessType) * 10))

        assert roots == [proof_roots[pt] for pt in list(ProcessType) * 10]
        assert proof_leaves == snapshot
