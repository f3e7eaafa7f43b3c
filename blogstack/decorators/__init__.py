from blogstack.decorators.metrics import timed

__all__ = ["timed"]
