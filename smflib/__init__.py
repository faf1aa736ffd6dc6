"""
Idempotent management of SMF service properties on Solaris and illumos hosts.
"""
