"""
Only the root tests directory carries an __init__.py, so `tests.helpers` can be
imported from any test module. Test subdirectories work as namespace packages
(PEP 420), which keeps the tree free of empty files. Test module basenames must
therefore stay unique across the whole tests/ tree.
"""
