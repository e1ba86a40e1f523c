"""
Exporters Module
FBX ASCII geometry, animation and document writers
"""
