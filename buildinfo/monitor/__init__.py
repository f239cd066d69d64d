"""buildinfo presentation helpers.

Modules
-------
status
    Pure functions turning progress signals into status-bar and
    notification text.
renderer
    ``TimelineRenderer`` turns a ``LedgerSnapshot`` into a Rich panel.
"""
