import logging
from abc import abstractmethod
from collections.abc import Iterable, Iterator
from enum import Enum
from typing import Any, cast, Generic, Optional, Protocol, TypeVar


logger = logging.getLogger(__name__)


class ComparableKey(Protocol):
    @abstractmethod
    def __lt__(self, other: Any, /) -> bool: ...


K = TypeVar('K', bound=ComparableKey)


class InsertOutcome(Enum):
    """Result of an insert. Truthy only when a node was created."""
    INSERTED = 'inserted'
    DUPLICATE = 'duplicate'

    def __bool__(self):
        return self is InsertOutcome.INSERTED


class RemoveOutcome(Enum):
    """Result of a remove. Truthy only when a node was removed."""
    REMOVED = 'removed'
    NOT_FOUND = 'not found'

    def __bool__(self):
        return self is RemoveOutcome.REMOVED


class BstNode(Generic[K]):
    __slots__ = 'key', 'left', 'right'

    def __init__(self, key: K):
        self.key: K = key
        # a node owns its children; nothing else references them
        self.left: 'None | BstNode[K]' = None
        self.right: 'None | BstNode[K]' = None

    def __str__(self):
        return f'{self.__class__.__name__}({self.key})'

    def __repr__(self):
        return str(self)

    def _replace_child(self, child: 'BstNode[K]', replacement: 'BstNode[K] | None'):
        """Put replacement into the slot currently holding child."""
        if self.left is child:
            self.left = replacement
        elif self.right is child:
            self.right = replacement
        else:
            raise RuntimeError('Replaced child does not exist in parent')

    def _unlink(self) -> 'BstNode[K] | None':
        """Remove this node's key from the subtree rooted here. Return the node that takes this node's slot, which is
        None if this was a leaf.
        """
        if self.left is None and self.right is None:
            return None
        if self.left is None:
            # only a right child
            return self.right
        if self.right is None:
            # only a left child
            return self.left
        # two children: pull the in-order successor's key up, then splice the successor out of the right subtree
        # the successor has no left child, so removing it never lands back here
        successor_key = self.right.get_min().key
        self.key = successor_key
        self.right, _ = self.right.remove(successor_key)
        return self

    def get_children(self) -> tuple['BstNode[K]', ...]:
        """Get a tuple of this node's children. May have 0, 1, or 2 elements. If it has 2 children, the returned order
        will always be (left, right).
        """
        return tuple(i for i in [self.left, self.right] if i is not None)

    def get_min(self) -> 'BstNode[K]':
        """Get the leftmost node of this subtree."""
        node = self
        while node.left is not None:
            node = node.left
        return node

    def get_max(self) -> 'BstNode[K]':
        """Get the rightmost node of this subtree."""
        node = self
        while node.right is not None:
            node = node.right
        return node

    def get_height(self) -> int:
        """Number of levels in this subtree; a leaf has a height of 1."""
        height = 0
        level = [self]
        while level:
            height += 1
            # expand one level at a time, breadth first
            level = [n for node in level for n in node.get_children()]
        return height

    def count(self) -> int:
        """Count the nodes in this subtree by walking it."""
        total = 0
        stack: list['BstNode[K]'] = [self]
        while stack:
            node = stack.pop()
            total += 1
            stack.extend(node.get_children())
        return total

    def sorted(self) -> Iterator['BstNode[K]']:
        """Return an iterator over the nodes of this subtree in key order."""
        stack: list['BstNode[K]'] = []
        node: 'BstNode[K] | None' = self
        while stack or node is not None:
            # go as far left as possible, then visit and continue with the right subtree
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node
            node = node.right

    def search(self, key: K) -> Optional[int]:
        """Search for key among this node and its descendents.

        Return the number of comparisons needed to reach it (0 if self holds it), or None if it is not present.
        """
        node: 'BstNode[K] | None' = self
        depth = 0
        while node is not None:
            if key == node.key:
                return depth
            # lesser keys are always in the left subtree, greater keys in the right subtree
            node = node.left if key < node.key else node.right
            depth += 1
        return None

    def insert(self, key: K) -> tuple['BstNode[K]', bool]:
        """Insert key into this subtree.

        returns (subtree_root, inserted), where subtree_root is always self (new keys only ever land in empty slots
        below it, so the root never changes; the tuple mirrors remove) and inserted is False if the key was already
        present.
        """
        node = self
        while True:
            if key == node.key:
                return (self, False)
            if key < node.key:
                if node.left is None:
                    node.left = self.__class__(key)
                    return (self, True)
                node = node.left
            else:
                if node.right is None:
                    node.right = self.__class__(key)
                    return (self, True)
                node = node.right

    def remove(self, key: K) -> tuple['BstNode[K] | None', bool]:
        """Find the node holding key and remove it from this subtree.

        returns (subtree_root, removed), where subtree_root is the root to reattach in this subtree's slot (None if the
        subtree is now empty) and removed is False if the key was not present.
        """
        parent: 'BstNode[K] | None' = None
        node: 'BstNode[K] | None' = self
        while node is not None and key != node.key:
            parent = node
            node = node.left if key < node.key else node.right
        if node is None:
            # reached an empty slot, nothing changes
            return (self, False)
        replacement = node._unlink()
        if parent is None:
            # removed the root of this subtree
            return (replacement, True)
        parent._replace_child(node, replacement)
        return (self, True)


class BinarySearchTree(Generic[K]):
    """Unbalanced binary search tree of unique keys."""
    __slots__ = ('_root', '_size')

    def __init__(self, init: Optional[Iterable[K]] = None):
        """Initialize the tree, optionally with an iterable of keys to insert in order."""
        self._root: 'BstNode[K] | None' = None
        self._size = 0
        if init:
            self.extend(init)

    def __len__(self):
        """The number of keys; tracked on every insert and remove so this is a constant time operation."""
        return self._size

    def __str__(self):
        return f'{self.__class__.__name__}({str(list(self.sorted()))})'

    def __repr__(self):
        return str(self)

    def __contains__(self, key: K):
        return self.search(key) is not None

    def __eq__(self, other):
        """Trees are equal if they hold the same keys (need not have the same structure)."""
        if not isinstance(other, BinarySearchTree):
            return False
        return len(self) == len(other) and list(self.sorted()) == list(other.sorted())

    @property
    def root(self) -> 'BstNode[K] | None':
        """The root node for read-only walks, or None if the tree is empty."""
        return self._root

    def has_root(self) -> bool:
        return self._root is not None

    def clear(self):
        """Removes all keys from the tree."""
        self._root = None
        self._size = 0

    def sorted(self) -> Iterator[K]:
        """Return an iterator over the keys in ascending order."""
        if self._root is not None:
            for node in self._root.sorted():
                yield node.key

    def minimum(self) -> Optional[K]:
        return self._root.get_min().key if self._root is not None else None

    def maximum(self) -> Optional[K]:
        return self._root.get_max().key if self._root is not None else None

    def get_height(self) -> int:
        """Number of levels in the tree; 0 when empty."""
        return self._root.get_height() if self._root is not None else 0

    def search(self, key: K) -> Optional[int]:
        """Return the depth of key (the root is at depth 0), or None if it is not in the tree."""
        if self._root is None:
            return None
        return self._root.search(key)

    def contains(self, key: K) -> bool:
        return key in self

    def insert(self, key: K) -> InsertOutcome:
        """Insert a key into the tree. A key already present leaves the tree unchanged and reports a duplicate."""
        assert(key is not None)
        if self._root is None:
            self._root = BstNode(key)
            inserted = True
        else:
            self._root, inserted = self._root.insert(key)
        if inserted:
            self._size += 1
            logger.info('Value %s inserted.', key)
            return InsertOutcome.INSERTED
        logger.info('Value %s already exists.', key)
        return InsertOutcome.DUPLICATE

    def remove(self, key: K) -> RemoveOutcome:
        """Remove a key from the tree. A key that is not present leaves the tree unchanged."""
        assert(key is not None)
        removed = False
        if self._root is not None:
            self._root, removed = self._root.remove(key)
        if removed:
            self._size -= 1
            logger.info('Value %s removed.', key)
            return RemoveOutcome.REMOVED
        logger.info('Value %s not found.', key)
        return RemoveOutcome.NOT_FOUND

    def extend(self, keys: Iterable[K]) -> int:
        """Add an iterable of keys to the tree. Returns the number of keys inserted."""
        inserted = 0
        for key in keys:
            inserted += int(bool(self.insert(key)))
        return inserted

    @staticmethod
    def test(iters=1, iters_per_iter=1000, remove_prob=.2, print_time=True):
        """Run tests. Will throw an AssertionError if there is an error."""
        import random
        import time
        start_time = time.time()
        for _ in range(iters):
            keys: set[int] = set()
            tree: BinarySearchTree[int] = BinarySearchTree()
            # the tree should start out empty
            assert(len(tree) == 0)
            assert(not tree.has_root())
            assert(tree.get_height() == 0)
            # insert and remove a group of keys, adding them both to the tree and to a set
            for _ in range(iters_per_iter):
                height = tree.get_height()
                if random.random() <= remove_prob and keys:
                    # making a random choice from a set is a O(N) operation, but for a test, it's fine
                    key = random.choice(tuple(keys))
                    assert(tree.remove(key) is RemoveOutcome.REMOVED)
                    assert(key not in tree)
                    keys.remove(key)
                    # removing never grows the tree
                    assert(tree.get_height() <= height)
                else:
                    key = random.randint(-1000, 1000)
                    already_exists = key in keys
                    assert(bool(tree.insert(key)) != already_exists)
                    keys.add(key)
                    # inserting never shrinks the tree
                    assert(tree.get_height() >= height)
            # they should now have the same number of keys and when sorted should be the same
            assert(len(tree) == len(keys))
            assert(len(tree) == (tree.root.count() if tree.root is not None else 0))
            assert(list(tree.sorted()) == sorted(keys))
            root = cast(BstNode[int], tree.root) if keys else None
            for key in keys:
                # every key is found, and at the depth the walk from the root takes
                depth = tree.search(key)
                assert(depth is not None)
                node = root
                for _ in range(depth):
                    node = cast(BstNode[int], node)
                    node = node.left if key < node.key else node.right
                assert(cast(BstNode[int], node).key == key)
            for key in keys:
                # the key should not be inserted again (since it already exists), and should be removable once
                assert(tree.insert(key) is InsertOutcome.DUPLICATE)
                assert(tree.remove(key) is RemoveOutcome.REMOVED)
                assert(tree.remove(key) is RemoveOutcome.NOT_FOUND)
            # after removing everything, the tree should be empty
            assert(len(tree) == 0)
            assert(not tree.has_root())
            assert(tree.get_height() == 0)
            assert(list(tree.sorted()) == [])
        end_time = time.time()
        total_time = end_time - start_time
        if print_time:
            print(f'Test successful with {iters} iterations and {iters_per_iter} steps per iteration')
            print(f'Total time of {total_time:.2f}s and average time of {(total_time / iters):.2f}s per iteration')


if __name__ == '__main__':
    BinarySearchTree.test()
