from tries.prefix_index import PrefixIndex, TrieNode

__all__ = ["PrefixIndex", "TrieNode"]
