"""Line-by-line text processing behind LaunchBar.text_action."""

from typing import Callable, List, Sequence, Union

TextArguments = Union[str, Sequence[str]]


def normalize_arguments(text_arguments: TextArguments) -> List[str]:
    """
    LaunchBar usually merges string arguments into one string, but items
    such as paths arrive as a list. Accept both.
    """
    if isinstance(text_arguments, str):
        return [text_arguments]
    if isinstance(text_arguments, (bytes, bytearray)):
        raise TypeError("text arguments must be str, not bytes")

    arguments = list(text_arguments)
    for argument in arguments:
        if not isinstance(argument, str):
            raise TypeError(f"text arguments must be str, got {type(argument).__name__}")
    return arguments


def process_lines(text_arguments: TextArguments,
                  text_processing_function: Callable[[str], str]) -> List[str]:
    """Split every argument on newlines, map each line, flatten in order."""
    return [
        text_processing_function(line)
        for argument in normalize_arguments(text_arguments)
        for line in argument.split("\n")
    ]
