"""
Huffman tree construction and code assignment.

The tree lives in an arena (`HuffmanTree.nodes`) with children referenced by
index. Equal weights are ordered by arrival: leaves arrive in ascending
symbol value, merged nodes arrive in the order they are created. The first
node taken from the queue becomes the left child (bit "0").
"""

import heapq
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from huffcodec.errors import FormatError

CodeTable = Dict[int, str]


@dataclass
class HuffmanNode:
    weight: int
    symbol: Optional[int] = None
    left: int = -1
    right: int = -1

    @property
    def is_leaf(self) -> bool:
        return self.left < 0 and self.right < 0


@dataclass
class HuffmanTree:
    nodes: List[HuffmanNode] = field(default_factory=list)
    root: int = -1

    def add(self, node: HuffmanNode) -> int:
        self.nodes.append(node)
        return len(self.nodes) - 1

    @property
    def weight(self) -> int:
        return self.nodes[self.root].weight


def count_frequencies(data: bytes) -> Dict[int, int]:
    """Occurrences of each byte value present in `data`."""
    return dict(Counter(data))


def build_tree(freqs: Mapping[int, int]) -> Optional[HuffmanTree]:
    """
    Build a Huffman tree from symbol -> frequency.

    Returns None when there is nothing to encode. Zero counts are ignored.
    """
    tree = HuffmanTree()
    heap = []
    arrival = 0
    for symbol in sorted(freqs):
        weight = freqs[symbol]
        if weight <= 0:
            continue
        idx = tree.add(HuffmanNode(weight=weight, symbol=symbol))
        heap.append((weight, arrival, idx))
        arrival += 1

    if not heap:
        return None

    heapq.heapify(heap)
    while len(heap) > 1:
        w_left, _, left = heapq.heappop(heap)
        w_right, _, right = heapq.heappop(heap)
        merged = tree.add(HuffmanNode(weight=w_left + w_right, left=left, right=right))
        heapq.heappush(heap, (w_left + w_right, arrival, merged))
        arrival += 1

    tree.root = heap[0][2]
    return tree


def generate_codes(tree: Optional[HuffmanTree]) -> CodeTable:
    """
    Walk the tree and collect the bit path to every leaf.

    A single-leaf tree gets the code "0".
    """
    if tree is None:
        return {}

    root = tree.nodes[tree.root]
    if root.is_leaf:
        return {root.symbol: "0"}

    codes: CodeTable = {}
    stack = [(tree.root, "")]
    while stack:
        idx, prefix = stack.pop()
        node = tree.nodes[idx]
        if node.is_leaf:
            codes[node.symbol] = prefix
            continue
        stack.append((node.right, prefix + "1"))
        stack.append((node.left, prefix + "0"))
    return codes


def weighted_length(freqs: Mapping[int, int], codes: Mapping[int, str]) -> int:
    """Total encoded bits: sum of frequency x code length."""
    return sum(freqs[symbol] * len(codes[symbol]) for symbol in freqs if freqs[symbol] > 0)


def is_prefix_free(codes: Mapping[int, str]) -> bool:
    ordered = sorted(codes.values())
    return all(not b.startswith(a) for a, b in zip(ordered, ordered[1:]))


class DecodeTrie:
    """
    Binary trie rebuilt from a code table.

    Node 0 is the root. `children[n]` holds the (left, right) indices, -1 where
    no branch exists; `symbols[n]` is the byte at a leaf, None elsewhere.
    """

    def __init__(self) -> None:
        self.children: List[List[int]] = [[-1, -1]]
        self.symbols: List[Optional[int]] = [None]

    @classmethod
    def from_codes(cls, codes: Mapping[int, str]) -> "DecodeTrie":
        trie = cls()
        for symbol in sorted(codes):
            trie.insert(symbol, codes[symbol])
        return trie

    def is_leaf(self, node: int) -> bool:
        return self.symbols[node] is not None

    def insert(self, symbol: int, code: str) -> None:
        if not code:
            raise FormatError(f"empty code for symbol {symbol}", "code_length", ">= 1", 0)
        if not set(code).issubset({"0", "1"}):
            raise FormatError(f"code for symbol {symbol} is not a bitstring", "code", "0/1 digits", code)

        node = 0
        for depth, bit in enumerate(code):
            if self.is_leaf(node):
                raise FormatError(
                    f"code table is not prefix-free: code of symbol {self.symbols[node]} "
                    f"is a prefix of the code of symbol {symbol}",
                    "code",
                    "prefix-free",
                    code[:depth],
                )
            branch = 0 if bit == "0" else 1
            nxt = self.children[node][branch]
            if nxt < 0:
                nxt = len(self.children)
                self.children.append([-1, -1])
                self.symbols.append(None)
                self.children[node][branch] = nxt
            node = nxt

        if self.is_leaf(node) or self.children[node] != [-1, -1]:
            raise FormatError(
                f"code table is not prefix-free: code of symbol {symbol} collides with another code",
                "code",
                "prefix-free",
                code,
            )
        self.symbols[node] = symbol

    def step(self, node: int, bit: int) -> int:
        nxt = self.children[node][bit]
        if nxt < 0:
            raise FormatError("bit path not present in code table", "bit", "known branch", bit)
        return nxt
