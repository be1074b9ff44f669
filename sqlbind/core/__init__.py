"""
Ambient support: settings and connection helper.
"""
