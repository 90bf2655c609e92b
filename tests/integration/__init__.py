"""
Integration tests for retryloop.

Test components together with real clocks and threads:
- Background runs (spawn + receive, concurrent runs on one loop)
- Blocking runs from synchronous code (run_blocking)
- Timeouts against the wall clock
"""
