"""Hero draft recommendation engine."""
