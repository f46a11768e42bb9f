"""
QuickScan domain layer.

Pure business logic: authentication, file storage metadata, scans and
text analysis contracts. No web framework imports.
"""
