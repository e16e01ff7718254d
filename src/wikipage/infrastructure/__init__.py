"""Infrastructure layer — file storage for wiki pages.

The page store is the only place that touches the filesystem.
It must never import from services, commands, or output.
"""
