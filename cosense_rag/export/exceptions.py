class SyncException(Exception):
    pass
