"""
dslschema - schemas of what a restricted configuration language may call.

Given host types whose members carry role tags, dslschema decides which
functions a declarative configuration script may call and what each one
means:

- builders that set a property and return the built object
- adding functions that create and append a new child object
- configuring functions that open an existing child for configuration
- pure functions and constructors

The resulting schema entries let an interpreter validate and run scripts
without ever invoking arbitrary host code paths.
"""

__version__ = "0.1.0"
