"""Developer and technology utilities.

Number bases, bandwidth, dates, colors and text codecs. Most of these
produce textual results; invalid text input is reported against the input
that carried it. Dates and timestamps are interpreted in UTC so that every
evaluation is reproducible.
"""

from __future__ import annotations

import base64
import binascii
import colorsys
import datetime as dt
import ipaddress
import json
import math
import re
import urllib.parse
from collections.abc import Mapping
from typing import Any, Final

from formulary.calc.models import DiagramKind, Domain, FlatCalculator, InputSpec, Result
from formulary.calc.outcome import DegenerateComputationError, InvalidInputError
from formulary.calc.registry import CalculatorRegistry, FormulaRegistry
from formulary.catalogs.common import diagram, fmt, num, select, text

RGB = tuple[int, int, int]

BASE_FORMATS: Final[Mapping[int, str]] = {2: "b", 8: "o", 10: "d", 16: "X"}

SIZE_BITS: Final[Mapping[str, float]] = {"MB": 8e6, "GB": 8e9, "TB": 8e12}
SPEED_BPS: Final[Mapping[str, float]] = {"Kbps": 1e3, "Mbps": 1e6, "Gbps": 1e9}

# Inputs below this are read as seconds, above it as milliseconds.
UNIX_MILLISECONDS_THRESHOLD: Final[float] = 1e10

WCAG_AA_NORMAL: Final[float] = 4.5
WCAG_AAA_NORMAL: Final[float] = 7.0
WCAG_AA_LARGE: Final[float] = 3.0

PERMISSION_TRIADS: Final[tuple[str, ...]] = (
    "---", "--x", "-w-", "-wx", "r--", "r-x", "rw-", "rwx",
)  # fmt: skip

REGEX_FLAGS: Final[Mapping[str, re.RegexFlag]] = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
}

# Characters encodeURIComponent leaves alone besides letters and digits.
URI_COMPONENT_SAFE: Final[str] = "-_.!~*'()"

FORMULAS = FormulaRegistry()
formula = FORMULAS.formula

Inputs = Mapping[str, Any]


def parse_hex_color(name: str, raw: str) -> RGB:
    """Parse "#RRGGBB" or "#RGB" (hash optional) into an RGB triple.

    Raises:
        InvalidInputError: If the text is not a hex color.
    """
    digits = raw.strip().removeprefix("#")
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    if not re.fullmatch(r"[0-9a-fA-F]{6}", digits):
        raise InvalidInputError(name, f"'{raw}' is not a hex color like #RRGGBB")
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def hex_color(rgb: RGB) -> str:
    return "#{:02X}{:02X}{:02X}".format(*rgb)


def relative_luminance(rgb: RGB) -> float:
    """WCAG 2 relative luminance of an sRGB color."""

    def channel(value: int) -> float:
        c = value / 255
        return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4

    r, g, b = (channel(c) for c in rgb)
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(first: RGB, second: RGB) -> float:
    lighter, darker = sorted((relative_luminance(first), relative_luminance(second)), reverse=True)
    return (lighter + 0.05) / (darker + 0.05)


def to_hsl(rgb: RGB) -> tuple[float, float, float]:
    """Hue in degrees, saturation and lightness in percent."""
    h, lightness, s = colorsys.rgb_to_hls(*(c / 255 for c in rgb))
    return h * 360, s * 100, lightness * 100


def from_hsl(hue: float, saturation: float, lightness: float) -> RGB:
    r, g, b = colorsys.hls_to_rgb((hue % 360) / 360, lightness / 100, saturation / 100)
    return round(r * 255), round(g * 255), round(b * 255)


def _bits(value: int, width: int) -> list[bool]:
    return [bit == "1" for bit in format(value, f"0{width}b")]


def _whole(v: Inputs, name: str) -> int:
    value = v[name]
    if not float(value).is_integer():
        raise InvalidInputError(name, f"{name} must be a whole number")
    return int(value)


@formula("base-converter.base-converter")
def _base_converter(v: Inputs) -> Result:
    source, target = int(v["from"]), int(v["to"])
    try:
        decimal = int(v["value"].strip(), source)
    except ValueError as exc:
        raise InvalidInputError("value", f"'{v['value']}' is not a base-{source} number") from exc
    width = max(8, math.ceil(abs(decimal).bit_length() / 8) * 8)
    return Result(
        value=format(decimal, BASE_FORMATS[target]),
        unit=f"(Base {target})",
        steps=(
            f"Decimal: {decimal}",
            f"Binary: {decimal:b}",
            f"Hex: {decimal:X}",
        ),
        diagram=diagram(DiagramKind.BINARY, {"bits": _bits(abs(decimal), width)}),
    )


def _parse_word(raw: str, kind: str, width: int) -> int:
    """Read a value of the given kind into its unsigned two's complement word."""
    max_unsigned = (1 << width) - 1
    cleaned = re.sub(r"\s", "", raw)
    try:
        if kind in ("signed", "unsigned"):
            value = int(cleaned)
        elif kind == "binary":
            value = int(cleaned.removeprefix("0b"), 2)
        else:
            value = int(cleaned.removeprefix("0x"), 16)
    except ValueError as exc:
        raise InvalidInputError("value", f"'{raw}' is not a valid {kind} value") from exc
    if kind == "signed":
        if not -(1 << (width - 1)) <= value < 1 << (width - 1):
            raise InvalidInputError("value", f"{value} does not fit in {width} signed bits")
        return value & max_unsigned
    if not 0 <= value <= max_unsigned:
        raise InvalidInputError("value", f"{value} does not fit in {width} unsigned bits")
    return value


@formula("signed-converter.signed-converter")
def _signed_converter(v: Inputs) -> Result:
    width = int(v["bits"])
    word = _parse_word(v["value"], v["type"], width)
    signed = word - (1 << width) if word >> (width - 1) else word
    binary = format(word, f"0{width}b")
    return Result(
        value=f"0b{binary}",
        unit=f"({width}-bit)",
        steps=(
            f"Signed: {signed}",
            f"Unsigned: {word}",
            f"Hex: 0x{word:0{math.ceil(width / 4)}X}",
            "Binary: " + " ".join(binary[i : i + 4] for i in range(0, width, 4)),
        ),
        diagram=diagram(DiagramKind.BINARY, {"bits": _bits(word, width)}),
    )


@formula("bandwidth.bandwidth")
def _bandwidth(v: Inputs) -> Result:
    bits = v["size"] * SIZE_BITS[v["sizeUnit"]]
    bps = v["speed"] * SPEED_BPS[v["speedUnit"]]
    if bps <= 0:
        raise DegenerateComputationError("Transfer speed must be positive")
    seconds = bits / bps
    hours, rest = divmod(int(seconds), 3600)
    minutes, secs = divmod(rest, 60)
    return Result(
        value=seconds,
        unit="s",
        steps=(
            f"Transfer Time: {hours}h {minutes}m {secs}s",
            f"Total Bits: {bits:.2e}",
            f"Speed: {fmt(v['speed'])} {v['speedUnit']}",
        ),
    )


def _iso_date(v: Inputs, name: str) -> dt.date:
    try:
        return dt.date.fromisoformat(v[name].strip())
    except ValueError as exc:
        raise InvalidInputError(name, f"'{v[name]}' is not a YYYY-MM-DD date") from exc


@formula("date-diff.date-diff")
def _date_diff(v: Inputs) -> Result:
    start, end = _iso_date(v, "start"), _iso_date(v, "end")
    days = abs((end - start).days)
    weeks, remainder = divmod(days, 7)
    return Result(
        value=float(days),
        unit="days",
        steps=(
            f"{weeks} Weeks, {remainder} Days",
            f"Hours: {days * 24}",
            f"Minutes: {days * 24 * 60}",
        ),
        diagram=diagram(
            DiagramKind.CALENDAR,
            {"start": start.isoformat(), "end": end.isoformat(), "days": days},
        ),
    )


@formula("unix-time.unix-time")
def _unix_time(v: Inputs) -> Result:
    stamp = v["ts"]
    if abs(stamp) < UNIX_MILLISECONDS_THRESHOLD:
        seconds, kind = stamp, "Seconds"
    else:
        seconds, kind = stamp / 1000, "Milliseconds"
    try:
        moment = dt.datetime.fromtimestamp(seconds, tz=dt.timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        raise InvalidInputError("ts", f"Timestamp {fmt(stamp)} is out of range") from exc
    return Result(
        value=moment.isoformat(),
        unit="UTC",
        steps=(
            f"UTC: {moment:%a, %d %b %Y %H:%M:%S} GMT",
            f"Input treated as: {kind}",
        ),
    )


@formula("color-converter.color-converter")
def _color_converter(v: Inputs) -> Result:
    rgb = parse_hex_color("color", v["color"])
    hue, saturation, lightness = to_hsl(rgb)
    return Result(
        value="rgb({}, {}, {})".format(*rgb),
        unit="RGB",
        steps=(
            f"HEX: {hex_color(rgb)}",
            f"HSL: {round(hue)}°, {round(saturation)}%, {round(lightness)}%",
        ),
        diagram=diagram(DiagramKind.COLOR_PREVIEW, {"hex": hex_color(rgb)}),
    )


@formula("contrast-checker.contrast-checker")
def _contrast_checker(v: Inputs) -> Result:
    fg = parse_hex_color("fg", v["fg"])
    bg = parse_hex_color("bg", v["bg"])
    ratio = contrast_ratio(fg, bg)
    passes = {
        "aa": ratio >= WCAG_AA_NORMAL,
        "aaa": ratio >= WCAG_AAA_NORMAL,
        "aaLarge": ratio >= WCAG_AA_LARGE,
    }

    def verdict(ok: bool) -> str:
        return "Pass" if ok else "Fail"

    return Result(
        value=ratio,
        unit=":1",
        steps=(
            f"AA Normal: {verdict(passes['aa'])}",
            f"AAA Normal: {verdict(passes['aaa'])}",
            f"AA Large Text: {verdict(passes['aaLarge'])}",
        ),
        diagram=diagram(
            DiagramKind.CONTRAST,
            {"fg": hex_color(fg), "bg": hex_color(bg), "ratio": ratio, "passes": passes},
        ),
    )


@formula("palette-generator.palette-generator")
def _palette_generator(v: Inputs) -> Result:
    rgb = parse_hex_color("base", v["base"])
    hue, saturation, lightness = to_hsl(rgb)
    base = hex_color(rgb)
    scheme = v["type"]
    if scheme == "complementary":
        colors = [base, hex_color(from_hsl(hue + 180, saturation, lightness))]
    elif scheme == "analogous":
        colors = [
            hex_color(from_hsl(hue - 30, saturation, lightness)),
            base,
            hex_color(from_hsl(hue + 30, saturation, lightness)),
        ]
    elif scheme == "triadic":
        colors = [
            base,
            hex_color(from_hsl(hue + 120, saturation, lightness)),
            hex_color(from_hsl(hue + 240, saturation, lightness)),
        ]
    else:
        colors = [
            hex_color(from_hsl(hue, saturation, max(0.0, lightness - 20))),
            base,
            hex_color(from_hsl(hue, saturation, min(100.0, lightness + 20))),
        ]
    return Result(
        value=", ".join(colors),
        steps=(f"Scheme: {scheme}", *colors),
        diagram=diagram(DiagramKind.PALETTE, {"colors": colors, "type": scheme}),
    )


@formula("gradient-generator.gradient-generator")
def _gradient_generator(v: Inputs) -> Result:
    first = hex_color(parse_hex_color("color1", v["color1"]))
    second = hex_color(parse_hex_color("color2", v["color2"]))
    if v["type"] == "linear":
        css = f"linear-gradient({fmt(v['angle'])}deg, {first}, {second})"
    else:
        css = f"radial-gradient(circle, {first}, {second})"
    return Result(
        value=css,
        unit="CSS",
        steps=(f"background: {css};",),
        diagram=diagram(DiagramKind.GRADIENT, {"css": css}),
    )


@formula("shade-generator.shade-generator")
def _shade_generator(v: Inputs) -> Result:
    rgb = parse_hex_color("base", v["base"])
    count = _whole(v, "steps")
    if count < 1:
        raise InvalidInputError("steps", "At least one step is required")
    hue, saturation, lightness = to_hsl(rgb)
    tints = [
        hex_color(from_hsl(hue, saturation, lightness + i * (100 - lightness) / (count + 1)))
        for i in range(1, count + 1)
    ]
    shades = [
        hex_color(from_hsl(hue, saturation, lightness - i * lightness / (count + 1)))
        for i in range(1, count + 1)
    ]
    return Result(
        value=float(count * 2),
        unit="variations",
        steps=(f"Base: {hex_color(rgb)}", *tints, *shades),
        diagram=diagram(
            DiagramKind.PALETTE,
            {"colors": [*reversed(tints), hex_color(rgb), *shades], "type": "Shades & Tints"},
        ),
    )


@formula("json-formatter.json-formatter")
def _json_formatter(v: Inputs) -> Result:
    try:
        document = json.loads(v["json"])
    except ValueError as exc:
        raise InvalidInputError("json", f"Invalid JSON: {exc}") from exc
    keys = len(document) if isinstance(document, dict | list) else 0
    return Result(
        value="Valid JSON",
        steps=(
            f"Size: {len(v['json'])} chars",
            f"Keys: {keys}",
            f"Minified: {json.dumps(document, separators=(',', ':'), ensure_ascii=False)}",
        ),
        diagram=diagram(
            DiagramKind.JSON_VIEWER,
            {"content": json.dumps(document, indent=2, ensure_ascii=False)},
        ),
    )


@formula("regex-tester.regex-tester")
def _regex_tester(v: Inputs) -> Result:
    flags = re.NOFLAG
    for letter in v["flags"].strip():
        if letter == "g":
            continue
        if letter not in REGEX_FLAGS:
            raise InvalidInputError("flags", f"Unsupported flag '{letter}'; use g, i, m or s")
        flags |= REGEX_FLAGS[letter]
    try:
        pattern = re.compile(v["pattern"], flags)
    except re.error as exc:
        raise InvalidInputError("pattern", f"Invalid pattern: {exc}") from exc
    matches = list(pattern.finditer(v["text"]))
    if "g" not in v["flags"]:
        matches = matches[:1]
    return Result(
        value=float(len(matches)),
        unit="matches",
        steps=tuple(
            f'Match {i}: "{match.group(0)}" at index {match.start()}'
            for i, match in enumerate(matches, start=1)
        ),
        diagram=diagram(
            DiagramKind.REGEX_MATCH,
            {
                "text": v["text"],
                "pattern": v["pattern"],
                "flags": v["flags"],
                "spans": [[match.start(), match.end()] for match in matches],
            },
        ),
    )


@formula("base64.base64")
def _base64(v: Inputs) -> Result:
    if v["mode"] == "encode":
        output = base64.b64encode(v["text"].encode("utf-8")).decode("ascii")
    else:
        try:
            output = base64.b64decode(v["text"].strip(), validate=True).decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as exc:
            raise InvalidInputError("text", f"Not valid Base64 text: {exc}") from exc
    return Result(
        value=output,
        steps=(f"Mode: {v['mode']}", f"Length: {len(output)}"),
    )


@formula("ip-subnet.ip-subnet")
def _ip_subnet(v: Inputs) -> Result:
    prefix = _whole(v, "cidr")
    try:
        network = ipaddress.IPv4Network(f"{v['ip'].strip()}/{prefix}", strict=False)
    except ValueError as exc:
        name = "cidr" if isinstance(exc, ipaddress.NetmaskValueError) else "ip"
        raise InvalidInputError(name, str(exc)) from exc
    first, last = network.network_address, network.broadcast_address
    if network.num_addresses > 2:
        first, last = first + 1, last - 1
    return Result(
        value=f"{network.network_address} / {prefix}",
        unit="Network",
        steps=(
            f"Mask: {network.netmask}",
            f"Broadcast: {network.broadcast_address}",
            f"Range: {first} - {last}",
            f"Hosts: {max(0, network.num_addresses - 2)}",
        ),
    )


@formula("chmod-calc.chmod-calc")
def _chmod_calc(v: Inputs) -> Result:
    octal = v["octal"].strip()
    if not re.fullmatch(r"0?[0-7]{3}", octal):
        raise InvalidInputError("octal", f"'{octal}' is not a three-digit octal mode like 755")
    octal = octal[-3:]
    triads = [PERMISSION_TRIADS[int(digit)] for digit in octal]
    return Result(
        value="".join(triads),
        unit=f"({octal})",
        steps=tuple(
            f"{who}: {triad} ({digit})"
            for who, triad, digit in zip(("Owner", "Group", "Public"), triads, octal, strict=True)
        ),
        diagram=diagram(DiagramKind.CHMOD, {"octal": octal}),
    )


@formula("url-encoder.url-encoder")
def _url_encoder(v: Inputs) -> Result:
    if v["mode"] == "encode":
        output = urllib.parse.quote(v["text"], safe=URI_COMPONENT_SAFE)
    else:
        try:
            output = urllib.parse.unquote(v["text"], errors="strict")
        except UnicodeDecodeError as exc:
            raise InvalidInputError("text", f"Malformed URI sequence: {exc}") from exc
    return Result(value=output, steps=(f"Mode: {v['mode']}",))


BASES = "Base Converters"
BANDWIDTH = "Bitrate & Bandwidth"
DATE_TIME = "Date & Time"
COLOR = "Color Tools"
DEVELOPER = "Developer Utils"

RADIX_OPTIONS: Final = (
    ("2", "Binary (2)"),
    ("8", "Octal (8)"),
    ("10", "Decimal (10)"),
    ("16", "Hexadecimal (16)"),
)
CODEC_MODES: Final = (("encode", "Encode"), ("decode", "Decode"))


def _flat(
    calc_id: str, title: str, category: str, description: str, icon: str, *inputs: InputSpec
) -> FlatCalculator:
    return FlatCalculator(
        id=calc_id,
        title=title,
        category=category,
        domain=Domain.TECH,
        description=description,
        icon=icon,
        inputs=inputs,
        formula_id=f"{calc_id}.{calc_id}",
    )


# fmt: off
CALCULATORS: Final[tuple[FlatCalculator, ...]] = (
    _flat(
        "base-converter", "Base Converter", BASES,
        "Convert between Binary, Octal, Decimal, Hex.", "binary",
        text("value", "Input Value", "255"),
        select("from", "From Base", RADIX_OPTIONS, "10"),
        select("to", "To Base", RADIX_OPTIONS, "2"),
    ),
    _flat(
        "signed-converter", "Signed/Unsigned & Two's Comp", BASES,
        "Convert between Signed, Unsigned, and Two's Complement.", "binary",
        text("value", "Value", "-5"),
        select("bits", "Bit Width", (("4", "4-bit"), ("8", "8-bit"), ("16", "16-bit"),
                                     ("32", "32-bit")), "8"),
        select("type", "Input Type", (("signed", "Signed Decimal"),
                                      ("unsigned", "Unsigned Decimal"),
                                      ("binary", "Binary"), ("hex", "Hex"))),
    ),
    _flat(
        "bandwidth", "Bandwidth Calculator", BANDWIDTH,
        "Calculate transfer time.", "network",
        num("size", "File Size", "", 1),
        select("sizeUnit", "Size Unit", (("MB", "MB"), ("GB", "GB"), ("TB", "TB")), "GB"),
        num("speed", "Speed", "", 100),
        select("speedUnit", "Speed Unit", (("Kbps", "Kbps"), ("Mbps", "Mbps"),
                                           ("Gbps", "Gbps")), "Mbps"),
    ),
    _flat(
        "date-diff", "Date Difference", DATE_TIME,
        "Calculate time between dates.", "calendar",
        text("start", "Start Date", "2024-01-01"),
        text("end", "End Date", "2024-01-31"),
    ),
    _flat(
        "unix-time", "Unix Timestamp", DATE_TIME,
        "Convert Epoch to Human Date.", "calendar",
        num("ts", "Timestamp (s or ms)", "", 1700000000, step=1),
    ),
    _flat(
        "color-converter", "Color Converter", COLOR,
        "HEX, RGB, HSL conversion.", "palette",
        text("color", "Color (Hex)", "#6366f1"),
    ),
    _flat(
        "contrast-checker", "Contrast Checker", COLOR,
        "Check WCAG contrast ratio.", "eye",
        text("fg", "Foreground (Hex)", "#FFFFFF"),
        text("bg", "Background (Hex)", "#6366F1"),
    ),
    _flat(
        "palette-generator", "Palette Generator", COLOR,
        "Generate color schemes.", "palette",
        text("base", "Base Color", "#3B82F6"),
        select("type", "Scheme", (("complementary", "Complementary"), ("analogous", "Analogous"),
                                  ("triadic", "Triadic"), ("monochromatic", "Monochromatic"))),
    ),
    _flat(
        "gradient-generator", "Gradient Generator", COLOR,
        "Create CSS gradients.", "palette",
        text("color1", "Color 1", "#6366F1"),
        text("color2", "Color 2", "#EC4899"),
        num("angle", "Angle", "deg", 135, 0, 360),
        select("type", "Type", (("linear", "Linear"), ("radial", "Radial"))),
    ),
    _flat(
        "shade-generator", "Shades & Tints", COLOR,
        "Generate light/dark variations.", "palette",
        text("base", "Base Color", "#10B981"),
        num("steps", "Steps", "", 5, 3, 10, 1),
    ),
    _flat(
        "json-formatter", "JSON Formatter", DEVELOPER,
        "Beautify or Minify JSON.", "file-json",
        text("json", "JSON Input", '{"name":"User","id":123,"active":true}'),
    ),
    _flat(
        "regex-tester", "Regex Tester", DEVELOPER,
        "Test regular expression patterns.", "search",
        text("pattern", "Pattern", r"([A-Z])\w+"),
        text("flags", "Flags", "g"),
        text("text", "Test String", "Hello World! This is a Test."),
    ),
    _flat(
        "base64", "Base64 Encoder", DEVELOPER,
        "Encode/Decode Base64 strings.", "code",
        text("text", "Input Text", "Hello World"),
        select("mode", "Mode", CODEC_MODES),
    ),
    _flat(
        "ip-subnet", "IP Subnet Calculator", DEVELOPER,
        "CIDR to Netmask, Network IP.", "globe",
        text("ip", "IP Address", "192.168.1.10"),
        num("cidr", "CIDR (0-32)", "", 24, 0, 32, 1),
    ),
    _flat(
        "chmod-calc", "Chmod Calculator", DEVELOPER,
        "Linux file permissions.", "shield",
        text("octal", "Octal (e.g. 755)", "755"),
    ),
    _flat(
        "url-encoder", "URL Encoder/Decoder", DEVELOPER,
        "Encode/Decode URL strings.", "globe",
        text("text", "Text", "https://example.com/search?q=hello world"),
        select("mode", "Mode", CODEC_MODES),
    ),
)
# fmt: on


def register_tech_calculators(registry: CalculatorRegistry) -> CalculatorRegistry:
    """Register all technology calculators into a registry."""
    registry.register_catalog(CALCULATORS, FORMULAS)
    return registry
