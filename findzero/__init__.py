"""findzero: find and clean up blank notes in a markdown vault.

The classifier and workflow layers are host-agnostic; the TUI, CLI and API
modules are thin hosts that render from the same review session state.
"""

__version__ = "0.1.0"
