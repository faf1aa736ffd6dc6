"""
Higher-level methods to converge service properties.

Each public function in this module should:

- perform a complete task, as needed by a script or user action
- avoid non-idempotent calls unless required by a prior state change
- load any current state needed by plumbing before handing it over
"""
