"""
Core domain exceptions shared by the manifest, engine and API layers.
"""
