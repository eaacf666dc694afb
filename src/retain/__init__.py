# Retain: spaced-repetition scheduling engine
from retain.consts import VERSION

__all__ = ["VERSION"]
