import os


def main():
    """Entry point.

    TODO: refactor this
    """
    path = "http://example.com/#anchor"
    # FIXME(alice): Move this out
    return os.path.join(path, "x")
