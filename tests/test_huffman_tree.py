import heapq
import random

import pytest
from dahuffman import HuffmanCodec

from huffcodec.encoding_schemes.huffman_tree import (
    DecodeTrie,
    build_tree,
    count_frequencies,
    generate_codes,
    is_prefix_free,
    weighted_length,
)
from huffcodec.errors import FormatError


def _reference_cost(freqs):
    """Optimal total code length: sum of all merge weights (one bit per lone symbol)."""
    weights = [w for w in freqs.values() if w > 0]
    if len(weights) == 1:
        return weights[0]
    heapq.heapify(weights)
    cost = 0
    while len(weights) > 1:
        merged = heapq.heappop(weights) + heapq.heappop(weights)
        cost += merged
        heapq.heappush(weights, merged)
    return cost


def test_count_frequencies():
    assert count_frequencies(b"aaabbc") == {97: 3, 98: 2, 99: 1}
    assert count_frequencies(b"") == {}


def test_empty_frequencies_give_no_tree():
    assert build_tree({}) is None
    assert build_tree({65: 0}) is None
    assert generate_codes(None) == {}


def test_aaabbc_scenario():
    freqs = count_frequencies(b"aaabbc")
    tree = build_tree(freqs)
    codes = generate_codes(tree)

    a, b, c = ord("a"), ord("b"), ord("c")
    assert tree.weight == 6
    assert len(codes[a]) <= len(codes[b]) <= len(codes[c])
    # c and b are merged first, then joined with a.
    assert codes == {a: "0", c: "10", b: "11"}
    assert weighted_length(freqs, codes) == 3 * 1 + 2 * 2 + 1 * 2


def test_single_symbol_gets_code_zero():
    tree = build_tree({0x41: 10})
    assert tree.nodes[tree.root].is_leaf
    assert generate_codes(tree) == {0x41: "0"}


def test_tree_is_strict_binary_with_input_leaves():
    freqs = {s: (s * 7) % 13 + 1 for s in range(40)}
    tree = build_tree(freqs)

    leaves = [n for n in tree.nodes if n.is_leaf]
    internal = [n for n in tree.nodes if not n.is_leaf]
    assert sorted(n.symbol for n in leaves) == sorted(freqs)
    assert len(internal) == len(leaves) - 1
    for node in internal:
        assert node.left >= 0 and node.right >= 0
        assert node.weight == tree.nodes[node.left].weight + tree.nodes[node.right].weight
    assert tree.weight == sum(freqs.values())


def test_zero_counts_are_excluded():
    codes = generate_codes(build_tree({1: 5, 2: 0, 3: 2}))
    assert set(codes) == {1, 3}


def test_ties_are_broken_by_symbol_order():
    freqs = {s: 1 for s in (200, 3, 77, 10)}
    first = generate_codes(build_tree(freqs))
    shuffled = dict(reversed(list(freqs.items())))
    assert generate_codes(build_tree(shuffled)) == first
    # Four equal weights: 3+10 merge first, then 77+200, then the two pairs.
    assert first == {3: "00", 10: "01", 77: "10", 200: "11"}


@pytest.mark.parametrize("seed", range(20))
def test_codes_are_prefix_free_and_optimal(seed):
    rng = random.Random(seed)
    n = rng.randint(1, 40)
    freqs = {s: rng.randint(1, 1000) for s in rng.sample(range(256), n)}

    codes = generate_codes(build_tree(freqs))

    assert set(codes) == set(freqs)
    assert all(codes.values())
    assert is_prefix_free(codes)
    assert weighted_length(freqs, codes) == _reference_cost(freqs)


def test_not_worse_than_dahuffman():
    data = b"the quick brown fox jumps over the lazy dog " * 20 + bytes(range(32))
    freqs = count_frequencies(data)
    ours = weighted_length(freqs, generate_codes(build_tree(freqs)))

    table = HuffmanCodec.from_data(data).get_code_table()
    theirs = sum(freqs[s] * table[s][0] for s in freqs)
    assert ours <= theirs


def test_skewed_tree_has_no_recursion_limit():
    # Fibonacci weights give a maximally unbalanced tree.
    fib = [1, 1]
    while len(fib) < 90:
        fib.append(fib[-1] + fib[-2])
    freqs = {s: w for s, w in enumerate(fib)}

    codes = generate_codes(build_tree(freqs))

    assert max(len(c) for c in codes.values()) == len(freqs) - 1
    assert is_prefix_free(codes)


def test_decode_trie_accepts_generated_codes():
    codes = generate_codes(build_tree(count_frequencies(b"abracadabra")))
    trie = DecodeTrie.from_codes(codes)
    for symbol, code in codes.items():
        node = 0
        for bit in code:
            node = trie.step(node, int(bit))
        assert trie.symbols[node] == symbol


@pytest.mark.parametrize(
    "codes",
    [
        {1: "0", 2: "01"},
        {1: "01", 2: "0"},
        {1: "10", 2: "10"},
        {1: "", 2: "1"},
        {1: "0", 2: "1x"},
    ],
)
def test_decode_trie_rejects_bad_tables(codes):
    with pytest.raises(FormatError):
        DecodeTrie.from_codes(codes)


def test_decode_trie_step_outside_table():
    trie = DecodeTrie.from_codes({5: "0"})
    with pytest.raises(FormatError):
        trie.step(0, 1)
