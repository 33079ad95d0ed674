"""Parsing and compact formatting of SVG path data and transform lists.

Path data is parsed into absolute segments. Formatting rounds every
coordinate, picks the shorter of the absolute and relative spelling for each
segment, turns axis-aligned lines into ``H``/``V`` and drops separators and
repeated command letters where the grammar allows it.
"""

import re

from vjs_svg_sprite.constants import DEFAULT_FLOAT_PRECISION

# Number of arguments taken by each command
ARG_COUNTS = {"M": 2, "L": 2, "H": 1, "V": 1, "C": 6, "S": 4, "Q": 4, "T": 2, "A": 7, "Z": 0}

NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")
TRANSFORM_RE = re.compile(r"\s*(matrix|translate|scale|rotate|skewX|skewY)\s*\(([^)]*)\)\s*,?")

# (command, absolute arguments)
PathSegment = tuple[str, list[float]]
BoundingBox = tuple[float, float, float, float]


class PathDataError(ValueError):
    """Raised when path data or a transform list cannot be parsed."""


def format_number(value: float, precision: int = DEFAULT_FLOAT_PRECISION) -> str:
    """Format a number with at most ``precision`` decimals and no redundant characters.

    Args:
        value: Number to format
        precision: Maximum number of decimal places

    Returns:
        Shortest decimal spelling, e.g. ``.5``, ``-.25``, ``10``.
    """
    rounded = round(value, precision)
    if rounded == 0:
        return "0"
    text = f"{rounded:.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text.startswith("0."):
        text = text[1:]
    elif text.startswith("-0."):
        text = "-" + text[2:]
    return text


def join_numbers(numbers: list[str], previous: str | None = None) -> str:
    """Join formatted numbers using separators only where the grammar needs them.

    Args:
        numbers: Formatted numbers
        previous: Number emitted right before ``numbers``, if any

    Returns:
        The joined string.
    """
    result = []
    last = previous
    for number in numbers:
        if last is not None and not _can_follow(last, number):
            result.append(" ")
        result.append(number)
        last = number
    return "".join(result)


def _can_follow(last: str, number: str) -> bool:
    """Whether ``number`` can be written right after ``last`` without a separator."""
    if number.startswith("-"):
        return True
    return number.startswith(".") and ("." in last or "e" in last.lower())


def _skip_separators(data: str, pos: int) -> int:
    while pos < len(data) and (data[pos].isspace() or data[pos] == ","):
        pos += 1
    return pos


def parse_path_data(data: str) -> list[PathSegment]:
    """Parse path data into absolute segments.

    Implicit repeated commands are expanded, a moveto followed by extra
    coordinate pairs becomes lineto segments, and arc flags may be packed
    without separators.

    Args:
        data: Value of a ``d`` attribute

    Returns:
        List of absolute segments.

    Raises:
        PathDataError: If the data does not follow the path grammar.
    """
    segments: list[PathSegment] = []
    command: str | None = None
    cx = cy = 0.0
    sx = sy = 0.0
    pos = 0

    while True:
        pos = _skip_separators(data, pos)
        if pos >= len(data):
            break

        char = data[pos]
        if char.isalpha():
            if char.upper() not in ARG_COUNTS:
                raise PathDataError(f"Unknown path command '{char}' at {pos}")
            command = char
            pos += 1
            if command in "Zz":
                segments.append(("Z", []))
                cx, cy = sx, sy
                continue
        elif command is None or command in "Zz":
            raise PathDataError(f"Expected a path command at {pos}")

        upper = command.upper()
        relative = command.islower()
        args: list[float] = []
        for index in range(ARG_COUNTS[upper]):
            pos = _skip_separators(data, pos)
            if upper == "A" and index in (3, 4):
                if pos < len(data) and data[pos] in "01":
                    args.append(float(data[pos]))
                    pos += 1
                    continue
                raise PathDataError(f"Invalid arc flag at {pos}")
            match = NUMBER_RE.match(data, pos)
            if match is None:
                raise PathDataError(f"Expected a number at {pos}")
            args.append(float(match.group()))
            pos = match.end()

        if upper == "H":
            x = args[0] + cx if relative else args[0]
            segments.append(("H", [x]))
            cx = x
        elif upper == "V":
            y = args[0] + cy if relative else args[0]
            segments.append(("V", [y]))
            cy = y
        elif upper == "A":
            x, y = args[5], args[6]
            if relative:
                x, y = x + cx, y + cy
            segments.append(("A", [*args[:5], x, y]))
            cx, cy = x, y
        else:
            if relative:
                args = [value + (cx if i % 2 == 0 else cy) for i, value in enumerate(args)]
            segments.append((upper, args))
            cx, cy = args[-2], args[-1]
            if upper == "M":
                sx, sy = cx, cy
                # Extra coordinate pairs after a moveto are linetos
                command = "l" if relative else "L"

    return segments


def _relative_args(command: str, args: list[float], cx: float, cy: float) -> list[float]:
    if command == "H":
        return [args[0] - cx]
    if command == "V":
        return [args[0] - cy]
    if command == "A":
        return [*args[:5], args[5] - cx, args[6] - cy]
    return [value - (cx if i % 2 == 0 else cy) for i, value in enumerate(args)]


def format_path_data(
    segments: list[PathSegment], precision: int = DEFAULT_FLOAT_PRECISION
) -> str:
    """Format absolute segments as compact path data.

    The first segment is always written as an absolute moveto so that the
    result can be concatenated with other path data.

    Args:
        segments: Absolute segments as returned by ``parse_path_data``
        precision: Maximum number of decimal places

    Returns:
        Compact path data.
    """
    output: list[str] = []
    last_letter: str | None = None
    last_number: str | None = None
    cx = cy = 0.0
    sx = sy = 0.0

    for index, (command, raw_args) in enumerate(segments):
        if command == "Z":
            output.append("z")
            last_letter, last_number = "z", None
            cx, cy = sx, sy
            continue

        args = [round(value, precision) for value in raw_args]
        if command == "L":
            if args[1] == cy:
                command, args = "H", [args[0]]
            elif args[0] == cx:
                command, args = "V", [args[1]]

        absolute = [format_number(value, precision) for value in args]
        relative = [
            format_number(value, precision) for value in _relative_args(command, args, cx, cy)
        ]

        if index == 0 or len(" ".join(absolute)) < len(" ".join(relative)):
            letter, numbers = command, absolute
        else:
            letter, numbers = command.lower(), relative

        if letter == last_letter and letter not in "Mm":
            output.append(join_numbers(numbers, last_number))
        else:
            output.append(letter + join_numbers(numbers))
        last_letter, last_number = letter, numbers[-1]

        if command == "H":
            cx = args[0]
        elif command == "V":
            cy = args[0]
        else:
            cx, cy = args[-2], args[-1]
        if command == "M":
            sx, sy = cx, cy

    return "".join(output)


def convert_path_data(data: str, precision: int = DEFAULT_FLOAT_PRECISION) -> str:
    """Rewrite path data in its compact form.

    Args:
        data: Value of a ``d`` attribute
        precision: Maximum number of decimal places

    Returns:
        Compact path data.

    Raises:
        PathDataError: If the data does not follow the path grammar.
    """
    return format_path_data(parse_path_data(data), precision)


def path_bounding_box(segments: list[PathSegment]) -> BoundingBox | None:
    """Compute a box that encloses every segment of a path.

    Curves are enclosed by their control points, arcs by their endpoints
    widened by the arc diameter, so the box may be larger than the painted
    area but never smaller.

    Args:
        segments: Absolute segments

    Returns:
        ``(min_x, min_y, max_x, max_y)`` or None for an empty path.
    """
    xs: list[float] = []
    ys: list[float] = []
    cx = cy = 0.0
    sx = sy = 0.0

    for command, args in segments:
        if command == "Z":
            cx, cy = sx, sy
            continue
        if command == "H":
            xs.append(args[0])
            ys.append(cy)
            cx = args[0]
        elif command == "V":
            xs.append(cx)
            ys.append(args[0])
            cy = args[0]
        elif command == "A":
            x, y = args[5], args[6]
            chord = ((x - cx) ** 2 + (y - cy) ** 2) ** 0.5
            reach = max(2 * max(abs(args[0]), abs(args[1])), chord)
            for px, py in ((cx, cy), (x, y)):
                xs.extend((px - reach, px + reach))
                ys.extend((py - reach, py + reach))
            cx, cy = x, y
        else:
            xs.extend(args[0::2])
            ys.extend(args[1::2])
            cx, cy = args[-2], args[-1]
            if command == "M":
                sx, sy = cx, cy

    if not xs:
        return None
    return min(xs), min(ys), max(xs), max(ys)


def boxes_intersect(first: BoundingBox | None, second: BoundingBox | None) -> bool:
    """Whether two bounding boxes overlap or touch."""
    if first is None or second is None:
        return False
    return not (
        first[2] < second[0]
        or second[2] < first[0]
        or first[3] < second[1]
        or second[3] < first[1]
    )


def parse_transform(data: str) -> list[tuple[str, list[float]]]:
    """Parse a transform list.

    Args:
        data: Value of a ``transform`` attribute

    Returns:
        List of ``(name, arguments)`` pairs.

    Raises:
        PathDataError: If the value is not a valid transform list.
    """
    transforms: list[tuple[str, list[float]]] = []
    pos = 0
    data = data.strip()
    while pos < len(data):
        match = TRANSFORM_RE.match(data, pos)
        if match is None:
            raise PathDataError(f"Invalid transform at {pos}")
        name, raw_args = match.groups()
        args = [float(value) for value in NUMBER_RE.findall(raw_args)]
        transforms.append((name, args))
        pos = match.end()
    return transforms


def _is_identity(name: str, args: list[float]) -> bool:
    if name == "translate":
        return all(value == 0 for value in args)
    if name == "scale":
        return all(value == 1 for value in args)
    if name in ("rotate", "skewX", "skewY"):
        return bool(args) and args[0] == 0
    if name == "matrix":
        return args == [1, 0, 0, 1, 0, 0]
    return False


def convert_transform(data: str, precision: int = DEFAULT_FLOAT_PRECISION) -> str:
    """Rewrite a transform list in its compact form.

    Identity transforms are dropped and redundant arguments removed
    (``translate(x 0)`` becomes ``translate(x)``, ``scale(s s)`` becomes
    ``scale(s)``, ``rotate(a 0 0)`` becomes ``rotate(a)``).

    Args:
        data: Value of a ``transform`` attribute
        precision: Maximum number of decimal places

    Returns:
        Compact transform list; empty when every transform was an identity.

    Raises:
        PathDataError: If the value is not a valid transform list.
    """
    parts = []
    for name, raw_args in parse_transform(data):
        args = [round(value, precision) for value in raw_args]
        if _is_identity(name, args):
            continue
        if name == "translate" and len(args) == 2 and args[1] == 0:
            args = args[:1]
        elif name == "scale" and len(args) == 2 and args[0] == args[1]:
            args = args[:1]
        elif name == "rotate" and len(args) == 3 and args[1] == 0 and args[2] == 0:
            args = args[:1]
        numbers = [format_number(value, precision) for value in args]
        parts.append(f"{name}({join_numbers(numbers)})")
    return "".join(parts)
