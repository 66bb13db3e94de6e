"""
Prefix index (character-per-edge trie) over record identifiers.

This module holds the identifier index used by the record store for exact
lookup and prefix autocomplete.
Key design choices:
- **Memory efficiency:** `TrieNode` uses `__slots__` and *lazy* child dicts (`children=None`
  until the first child is added).
- **Exact keys:** identifiers are indexed verbatim. No case folding or Unicode
  normalization is applied, so `"ab12"` and `"AB12"` are distinct identifiers.
- **Iterative traversals:** enumeration and deletion are iterative (no recursion),
  so very long identifiers cannot hit the recursion limit.
- **Total operations:** every public method accepts any string and returns a
  definite result. "Not found" is a return value, never an exception.


Classes
-------
TrieNode
    Minimal node holding `children` (dict[str, TrieNode] or None) and `is_terminal`.
PrefixIndex
    Public API for insert, search, starts_with, enumerate_with_prefix, delete.


Complexity (typical)
--------------------
- insert / search / starts_with / delete: O(L)
- insert_many (sorted): ~O(total new characters created)
- enumerate_with_prefix: O(L + K * avg_suffix_length), K = number of results


Conventions & Notes
-------------------
- **Empty string:** never stored. `insert("")` is a no-op; `search("")`,
  `starts_with("")` and `delete("")` return False; enumeration with `""`
  returns an empty list.
- **Enumeration order:** follows child insertion order. Callers that need
  lexicographic output sort the returned list.
- **Deletion semantics:** a missing identifier leaves the tree untouched. A present
  one is unmarked and pruned upward until reaching a terminal node or a
  node with remaining children.
"""


class TrieNode:
  __slots__ = ("children", "is_terminal")

  def __init__(self):
    self.children = None
    self.is_terminal = False


class PrefixIndex:
  __slots__ = ("root", "_size")

  def __init__(self):
    self.root = TrieNode()
    self._size = 0

  def __len__(self):
    return self._size

  def __contains__(self, identifier):
    return self.search(identifier)

  def clear(self):
    """Drop every stored identifier."""
    self.root = TrieNode()
    self._size = 0


  def _child(self, node, ch):
    """Return the child of `node` along `ch`, creating it if missing."""
    children = node.children
    if children is None:
      nxt = TrieNode()
      node.children = {ch: nxt}
      return nxt
    nxt = children.get(ch)
    if nxt is None:
      nxt = children[ch] = TrieNode()
    return nxt

  def _mark(self, node):
    if not node.is_terminal:
      node.is_terminal = True
      self._size += 1


  def insert(self, identifier):
    """Insert a single identifier into the index.

    Empty strings are ignored; re-inserting a stored identifier changes
    nothing. Child dicts are only created when a node gets its first child.
    """
    if not identifier:
      return
    node = self.root
    for ch in identifier:
      node = self._child(node, ch)
    self._mark(node)


  def insert_many(self, identifiers):
    """Insert identifiers in sorted order, resuming each walk from the
    deepest node shared with the previous identifier.

    Used to rebuild the index from a loaded data file, where sorted
    identifiers tend to share long leading runs. Empty strings are skipped.
    """
    path = [self.root]
    prev = ""
    for identifier in sorted(set(filter(None, identifiers))):
      shared = 0
      for a, b in zip(prev, identifier):
        if a != b:
          break
        shared += 1
      del path[shared + 1:]
      for ch in identifier[shared:]:
        path.append(self._child(path[-1], ch))
      self._mark(path[-1])
      prev = identifier


  def _find_node(self, prefix):
    """Return the node at the end of `prefix`, or None if the path is missing."""
    node = self.root
    for ch in prefix:
      node = None if node.children is None else node.children.get(ch)
      if node is None:
        return None
    return node


  def search(self, identifier):
    """Return True iff `identifier` is stored in full."""
    if not identifier:
      return False
    node = self._find_node(identifier)
    return node is not None and node.is_terminal


  def starts_with(self, prefix):
    """Return True iff at least one stored identifier begins with `prefix`.

    A stored identifier counts as its own prefix. The empty prefix is
    rejected (returns False): prefix queries need at least one character.
    """
    if not prefix:
      return False
    return self._find_node(prefix) is not None


  def enumerate_with_prefix(self, prefix, k=None):
    """Return the stored identifiers that start with `prefix`.

    Parameters
    ----------
    prefix : str
        The prefix to enumerate from. Must be non-empty.
    k : int | None, default=None
        If None, return all matches; otherwise, return up to `k` matches.

    Returns
    -------
    list[str]
        Matching identifiers in traversal order, no duplicates. Empty when
        the prefix is empty or no identifier has it.

    Implementation details
    ----------------------
    - Iterative DFS with a shared mutable character buffer; strings are only
      joined when a terminal node is reached.
    - Traversal order follows child insertion order, so results are
      deterministic for a given insertion history but not sorted.
    """
    results = []
    if not prefix or (k is not None and k <= 0):
      return results
    node = self._find_node(prefix)
    if node is None:
      return results

    buf = list(prefix)
    if node.is_terminal:
      results.append(prefix)
      if k is not None and len(results) >= k:
        return results

    def child_iter(n):
      if not n.children:
        return iter(())
      return iter(n.children.items())

    stack = [(child_iter(node), len(buf))]

    while stack:
      it, depth = stack[-1]
      try:
        ch, child = next(it)
      except StopIteration:
        stack.pop()
        continue
      buf[depth:] = [ch]
      if child.is_terminal:
        results.append("".join(buf))
        if k is not None and len(results) >= k:
          return results
      stack.append((child_iter(child), depth + 1))
    return results


  def delete(self, identifier):
    """Delete a single identifier and prune nodes it alone was using.

    Strategy
    --------
    - Descend from the root, recording visited nodes and the edge characters
      that led to them.
    - If the path breaks or the last node is not terminal, report False.
      Nothing has been modified at that point.
    - Otherwise unset `is_terminal` and walk the recorded path backwards,
      detaching each node that is non-terminal and childless. Stop at the
      first node that still has children or terminates another identifier.

    Returns
    -------
    bool
        True if the identifier was present and removed, False otherwise.

    Complexity
    ----------
    O(L) descent plus at most L pruning steps.
    """
    if not identifier:
      return False

    path_nodes = [self.root]
    path_edges = [""]
    node = self.root
    for ch in identifier:
      children = node.children
      if children is None or ch not in children:
        return False
      node = children[ch]
      path_nodes.append(node)
      path_edges.append(ch)

    if not node.is_terminal:
      return False

    node.is_terminal = False
    self._size -= 1

    idx = len(path_nodes) - 1
    while idx > 0:
      cur = path_nodes[idx]
      if cur.is_terminal or cur.children:
        break
      parent = path_nodes[idx - 1]
      parent.children.pop(path_edges[idx], None)
      if not parent.children:
        parent.children = None
      idx -= 1
    return True


  def stats(self):
    """Describe the shape of the tree in one walk.

    Returns
    -------
    dict
        nodes: total nodes, root included
        terminals: nodes ending a stored identifier (equals `len(self)`)
        internal: nodes with at least one child
        max_depth: length of the longest stored identifier
        avg_branch_factor: mean out-degree over internal nodes (0.0 if none)
    """
    nodes = terminals = internal = edges = max_depth = 0
    stack = [(self.root, 0)]
    while stack:
      node, depth = stack.pop()
      nodes += 1
      if node.is_terminal:
        terminals += 1
        max_depth = max(max_depth, depth)
      if node.children:
        internal += 1
        edges += len(node.children)
        stack.extend((child, depth + 1) for child in node.children.values())
    return {
      "nodes": nodes,
      "terminals": terminals,
      "internal": internal,
      "max_depth": max_depth,
      "avg_branch_factor": edges / internal if internal else 0.0,
    }
