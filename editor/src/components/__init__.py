"""UI components for the Banner Layout Editor

This package contains the Qt-facing pieces of the editor core:
- transform_widgets: selection handles and gesture snapshots
- canvas_interaction: mouse events -> manipulation state machine
"""
