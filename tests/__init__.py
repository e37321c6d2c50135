"""
Tool Search Gateway Test Suite

The tests focus on the search contract shared by every strategy:
- Bounded, ordered results for any catalog and query
- Empty catalogs and empty queries
- Embedding download, caching and tolerant parsing
- External ranker failures and unknown tool names
- The HTTP surface used by the aggregator
"""
