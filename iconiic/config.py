"""Read-only constants shared by the parser, the engine and the help screen."""

from __future__ import annotations

TITLE = r"""
 _____ _____ ____  _   _ _____ _____ _____
|_   _/ ____/ __ \| \ | |_   _|_   _/ ____|
  | || |   | |  | |  \| | | |   | || |
  | || |   | |  | | . ` | | |   | || |
 _| || |___| |__| | |\  |_| |_ _| || |____
|_____\_____\____/|_| \_|_____|_____\_____|

BETA 0.1.0"""

USAGE = (
    "iconiic (-e <file path> <size>... [-i | --interpolate] [-p | --proportional])... "
    "(-o <output path> | -png <output path>) | -h"
)

EXAMPLES = (
    "iconiic -e small.png 16 20 24 -e big.png 32 64 -o output.ico",
    "iconiic -e image.png 32x12 64x28 48 -i -png output.zip",
)

COMMANDS = (
    ("-e (<options>)", "Specify an entry's options."),
    ("-o <output path>", "Outputs to .ico or .icns file."),
    ("-png <output path>", "Outputs a .png sequence as a .zip file."),
)

OPTIONS = (
    ("-i, --interpolate", "Apply linear interpolation when resampling the image."),
    ("-p, --proportional", "Preserves the aspect ratio of the image in the output."),
)

HELP_HINT = "iconiic -h"

# Largest width or height an .ico directory entry can describe.
ICO_MAX_SIZE = 256

# .icns chunk type per supported square size, PNG payloads.
ICNS_TYPES = {
    16: b"icp4",
    32: b"icp5",
    64: b"icp6",
    128: b"ic07",
    512: b"ic09",
    1024: b"ic10",
}
VALID_ICNS_SIZES = "16x16, 32x32, 64x64, 128x128, 512x512 and 1024x1024"

# Fixed member timestamp so repeated runs write identical archives.
ZIP_DATE_TIME = (1980, 1, 1, 0, 0, 0)

MAX_DIMENSION = 2**32 - 1

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEBUG_ENV = "ICONIIC_DEBUG"
