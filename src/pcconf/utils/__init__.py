"""
Yes, the dreaded "`utils`" folder.

I trust that the files themselves are named well enough.
"""
