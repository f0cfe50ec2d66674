"""
Closed-form rigid registration of corresponding 3D point sets.
"""
