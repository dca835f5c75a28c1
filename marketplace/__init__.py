"""
Gift marketplace backend: business order management, admin moderation
and gift-order verification/redemption.
"""
__version__ = "0.4.0"
