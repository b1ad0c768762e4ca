"""UI-facing glue for GroupDrag Toolkit.

Nothing here imports a GUI toolkit; widgets feed pointer events into the
controllers and re-render from their state.
"""
