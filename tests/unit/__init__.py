"""
Unit tests for retryloop.

Test individual components in isolation:
- Options (defaults, override order)
- Outcome (invariants, unwrap, predicates)
- Outcome channel (write-once, close, iteration)
- Retry engine (stop-condition ordering, callbacks, delivery)
- Logging configuration
"""
