from concurrent.futures import Future


class RecordingReporter:
    """Reporter double that resolves every report immediately."""

    def __init__(self, result=True):
        self.result = result
        self.calls = []

    def report(self, score, level_id=None):
        self.calls.append((score, level_id))
        future = Future()
        future.set_result(self.result)
        return future


class PendingReporter:
    """Reporter double whose uploads finish only when the test says so."""

    def __init__(self):
        self.futures = []

    def report(self, score, level_id=None):
        future = Future()
        self.futures.append(future)
        return future
