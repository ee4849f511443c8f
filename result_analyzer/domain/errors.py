class ResultAnalyzerError(Exception):
    pass


class DuplicateRollError(ResultAnalyzerError):
    pass


class CapacityError(ResultAnalyzerError):
    pass


class StudentNotFoundError(ResultAnalyzerError):
    pass


class EmptyStoreError(ResultAnalyzerError):
    pass


class PersistenceError(ResultAnalyzerError):
    pass


class PersistenceUnavailable(PersistenceError):
    pass


class CorruptSnapshotError(PersistenceError):
    pass


class OversizedSnapshotError(PersistenceError):
    pass


class InvalidRollError(ResultAnalyzerError):
    pass
