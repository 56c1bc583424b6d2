"""Binary Merkle tree over any registered hash function."""

from typing import List, Sequence

from .digest import Digest

# --- Type Aliases ---

Row = Sequence[int]
MerkleProof = List[Digest]


class MerkleTree:
    """Binary Merkle tree using hash_fn for leaves and hash_fn.merge for nodes.

    Leaves are hash_fn.hash(row). The leaf level is padded to a power of two
    with all-zero digests.
    """

    def __init__(self, hash_fn):
        self.hash_fn = hash_fn
        self.num_leaves = 0
        # levels[0] holds the (padded) leaf digests, levels[-1] the root
        self.levels: List[List[Digest]] = []

    def _zero_digest(self) -> Digest:
        return Digest((0,) * self.hash_fn.digest_size, self.hash_fn.field)

    # --- Core Operations ---

    def merkelize(self, rows: Sequence[Row]) -> Digest:
        """Build the tree and return its root.

        Args:
            rows: One row of field elements per leaf

        Raises:
            ValueError: If rows is empty
        """
        if len(rows) == 0:
            raise ValueError("cannot build a Merkle tree with no leaves")

        leaves = [self.hash_fn.hash(row) for row in rows]
        self.num_leaves = len(leaves)
        width = 1
        while width < len(leaves):
            width *= 2
        leaves += [self._zero_digest()] * (width - len(leaves))

        self.levels = [leaves]
        while len(self.levels[-1]) > 1:
            prev = self.levels[-1]
            self.levels.append([
                self.hash_fn.merge(prev[i], prev[i + 1]) for i in range(0, len(prev), 2)
            ])
        return self.root

    @property
    def root(self) -> Digest:
        if not self.levels:
            raise ValueError("Merkle tree has not been built - call merkelize first")
        return self.levels[-1][0]

    def get_proof(self, index: int) -> MerkleProof:
        """Sibling digests from the leaf level up to (not including) the root.

        Raises:
            ValueError: If the tree is not built or index is out of range
        """
        if not self.levels:
            raise ValueError("Merkle tree has not been built - call merkelize first")
        if index < 0 or index >= self.num_leaves:
            raise ValueError(f"Leaf index {index} out of range [0, {self.num_leaves})")
        proof = []
        for level in self.levels[:-1]:
            proof.append(level[index ^ 1])
            index //= 2
        return proof

    # --- Verification ---

    @staticmethod
    def verify(hash_fn, root: Digest, row: Row, index: int, proof: MerkleProof) -> bool:
        """Check that `row` sits at leaf `index` of the tree committed to by `root`."""
        if index < 0 or index >= (1 << len(proof)):
            return False
        node = hash_fn.hash(row)
        for sibling in proof:
            if index % 2 == 0:
                node = hash_fn.merge(node, sibling)
            else:
                node = hash_fn.merge(sibling, node)
            index //= 2
        return node == root
