"""
snaptrack workbench

Demonstration program and sample models. Run with:
    python -m snaptrack.workbench
"""
