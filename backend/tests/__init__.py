"""
Tests package for the QuickScan backend.

Suites are organized by type:
- unit/: Domain, application, infrastructure and API pieces in isolation
- integration/: The assembled Flask app through its test client
- contracts/: Behaviour every storage backend must share
- property/: Hypothesis properties of sanitization, tokens and signed links
"""
