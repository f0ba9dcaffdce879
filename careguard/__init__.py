"""
careguard – role-gated access decisions for the care portal.
"""
