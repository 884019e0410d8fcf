# filename: huffman_header.py

from huffman_core import (
    NUM_SYMBOLS,
    CorruptStreamError,
    HuffmanNode,
    HuffmanTree,
    SingletonTree,
)

# Tree header layout, pre-order, 0 child before 1 child:
#   internal node: flag bit 0, then child 0, then child 1
#   leaf:          flag bit 1, then the symbol as 8 bits (MSB first)
# A tree with L leaves takes 2L-1 flag bits plus 8L symbol bits.
LEAF_FLAG = 1
BRANCH_FLAG = 0

# a full binary tree with 256 leaves is at most 255 edges deep
MAX_DEPTH = NUM_SYMBOLS - 1


def write_tree(tree, out):
    if isinstance(tree, SingletonTree):
        # written as a root whose two branches reach the same leaf
        out.write_bit(BRANCH_FLAG)
        _write_node(tree.root, out)
        _write_node(tree.root, out)
    else:
        _write_node(tree.root, out)


def _write_node(node, out):
    if node.is_leaf():
        out.write_bit(LEAF_FLAG)
        out.write_byte(node.symbol)
    else:
        out.write_bit(BRANCH_FLAG)
        _write_node(node.c0, out)
        _write_node(node.c1, out)


def read_tree(inp):
    """Rebuild a tree from a header written by :func:`write_tree`.

    Leaf frequencies are not stored in the header, so every rebuilt node has
    frequency 0. Raises :class:`CorruptStreamError` if the header is cut short
    or cannot have come from ``write_tree``.
    """
    found = []
    try:
        root = _read_node(inp, found, 0)
    except EOFError as exc:
        raise CorruptStreamError("Malformed stream: tree header truncated") from exc

    if root.is_leaf():
        raise CorruptStreamError("Malformed stream: tree header has no branch")
    if len(found) == 2 and found[0].symbol == found[1].symbol:
        return SingletonTree(HuffmanNode(found[0].symbol, 0))

    leaves = [None] * NUM_SYMBOLS
    for leaf in found:
        if leaves[leaf.symbol] is not None:
            raise CorruptStreamError(
                "Malformed stream: symbol %d appears twice in tree header" % leaf.symbol)
        leaves[leaf.symbol] = leaf
    return HuffmanTree(root, leaves)


def _read_node(inp, found, depth):
    if depth > MAX_DEPTH:
        raise CorruptStreamError("Malformed stream: tree header nested too deep")
    if inp.read_bit() == LEAF_FLAG:
        leaf = HuffmanNode(inp.read_byte(), 0)
        found.append(leaf)
        return leaf
    c0 = _read_node(inp, found, depth + 1)
    c1 = _read_node(inp, found, depth + 1)
    return HuffmanNode(c0.symbol, 0, c0, c1)
