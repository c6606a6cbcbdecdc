"""Wire encoders for reporter output."""
