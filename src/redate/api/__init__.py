"""API module for redate.

Hosts the channel registry behind HTTP:
- Forwards method calls to registered channels
- Returns reply envelopes unchanged
- Forbidden: store access, argument interpretation
"""
