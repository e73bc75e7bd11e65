"""
Price Guide Package

Rules-based price estimation for intake form submissions.
Evaluates form answers against a business's pricing rules to produce a
price range, an audit trail of fired rules and a coverage-based confidence.
"""

__version__ = "1.0.0"
