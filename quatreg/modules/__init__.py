"""
Registration core and its input/output collaborators.
"""
