"""Rendering — data records to hypertext.

The engine dispatches on capability and shape; sequences go through the
table builder.
"""
