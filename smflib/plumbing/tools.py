"""
Locations of the external SMF command-line tools.
"""

SVCCFG = "svccfg"
"""
Service configuration tool, used to list and set service properties.  Resolved using `PATH`.
"""
