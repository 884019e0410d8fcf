# filename: huffman_core.py

import heapq

# alphabet size of a byte stream
NUM_SYMBOLS = 256
# number of bits in a byte
BYTE_BITS = 8


class HuffmanError(Exception):
    """Base class for errors raised by the Huffman coder."""


class DomainError(HuffmanError):
    """The caller asked for something outside the tree's alphabet."""


class CorruptStreamError(HuffmanError):
    """An encoded stream ended early or describes an impossible tree."""


class HuffmanNode:
    def __init__(self, symbol, freq, c0=None, c1=None):
        if (c0 is None) != (c1 is None):
            raise ValueError("internal nodes need exactly two children")
        self.symbol = symbol
        self.freq = freq
        self.c0 = c0
        self.c1 = c1
        self.parent = None
        if c0 is not None:
            c0.parent = self
            c1.parent = self

    def is_leaf(self):
        return self.c0 is None

    def __lt__(self, other):
        # ties on frequency fall back to the symbol value
        if self.freq != other.freq:
            return self.freq < other.freq
        return self.symbol < other.symbol

    def __repr__(self):
        return "HuffmanNode(symbol=%d, freq=%d)" % (self.symbol, self.freq)


class HuffmanTree:
    """A full binary Huffman tree and its symbol -> leaf lookup table.

    ``leaves`` has one slot per byte value; slots for symbols that did not
    occur are ``None``. The tree is never modified once built.
    """

    def __init__(self, root, leaves):
        self.root = root
        self.leaves = leaves
        self._codes = {}

    def __contains__(self, symbol):
        return (isinstance(symbol, int) and 0 <= symbol < NUM_SYMBOLS
                and self.leaves[symbol] is not None)

    def symbols(self):
        return [symbol for symbol, leaf in enumerate(self.leaves) if leaf is not None]

    def leaf(self, symbol):
        if symbol not in self:
            raise DomainError("symbol %r is not in the tree" % (symbol,))
        return self.leaves[symbol]

    def code_for(self, symbol):
        """Return the code word of ``symbol`` as a tuple of bits, root first.

        The word is found by climbing from the leaf to the root, which yields
        the bits backwards; they are pushed on a stack and popped off in
        root-to-leaf order.
        """
        code = self._codes.get(symbol)
        if code is None:
            node = self.leaf(symbol)
            stack = []
            while node.parent is not None:
                stack.append(0 if node is node.parent.c0 else 1)
                node = node.parent
            bits = []
            while stack:
                bits.append(stack.pop())
            code = self._codes[symbol] = tuple(bits)
        return code

    def generate_codes(self):
        return {symbol: "".join(str(bit) for bit in self.code_for(symbol))
                for symbol in self.symbols()}

    def encode(self, symbol, out):
        out.write_bits(self.code_for(symbol))

    def decode(self, inp):
        node = self.root
        try:
            while not node.is_leaf():
                node = node.c1 if inp.read_bit() else node.c0
        except EOFError as exc:
            raise CorruptStreamError("bitstream ended inside a code word") from exc
        return node.symbol


class SingletonTree(HuffmanTree):
    """Tree over a one-symbol alphabet.

    There is no second leaf to branch to, so the code word is the single bit
    ``0`` and either bit value decodes back to the one symbol.
    """

    def __init__(self, leaf):
        leaves = [None] * NUM_SYMBOLS
        leaves[leaf.symbol] = leaf
        super().__init__(leaf, leaves)

    def code_for(self, symbol):
        self.leaf(symbol)
        return (0,)

    def decode(self, inp):
        try:
            inp.read_bit()
        except EOFError as exc:
            raise CorruptStreamError("bitstream ended inside a code word") from exc
        return self.root.symbol


class HuffmanLogic:
    def build_tree(self, freqs):
        """Build a tree from 256 byte counts (a sequence or a symbol -> count mapping)."""
        freqs = self._frequency_list(freqs)

        # Build a priority queue for leaf nodes
        leaves = [None] * NUM_SYMBOLS
        priority_queue = []
        for symbol, freq in enumerate(freqs):
            if freq > 0:
                leaves[symbol] = HuffmanNode(symbol, freq)
                priority_queue.append(leaves[symbol])
        if not priority_queue:
            raise DomainError("cannot build a tree from an all-zero frequency table")
        heapq.heapify(priority_queue)

        if len(priority_queue) == 1:
            return SingletonTree(priority_queue[0])

        # Iteratively merge nodes to form the binary tree; the merged node
        # carries the symbol of its 0 child so later ties stay ordered
        while True:
            c0 = heapq.heappop(priority_queue)
            c1 = heapq.heappop(priority_queue)
            merged = HuffmanNode(c0.symbol, c0.freq + c1.freq, c0, c1)
            if not priority_queue:
                return HuffmanTree(merged, leaves)
            heapq.heappush(priority_queue, merged)

    def generate_codes(self, tree):
        return tree.generate_codes()

    @staticmethod
    def _frequency_list(freqs):
        if hasattr(freqs, "items"):
            table = [0] * NUM_SYMBOLS
            for symbol, freq in freqs.items():
                if not isinstance(symbol, int) or not 0 <= symbol < NUM_SYMBOLS:
                    raise DomainError("symbol %r is not a byte value" % (symbol,))
                table[symbol] = freq
            freqs = table
        else:
            freqs = list(freqs)
            if len(freqs) != NUM_SYMBOLS:
                raise DomainError("frequency table needs %d entries, got %d"
                                  % (NUM_SYMBOLS, len(freqs)))
        for freq in freqs:
            if freq < 0:
                raise DomainError("negative frequency %r" % (freq,))
        return freqs
