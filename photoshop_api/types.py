"""Enumerations shared by the Photoshop, Lightroom and Sensei API families."""

from __future__ import annotations

from enum import Enum


class Storage(str, Enum):
    """Storage backends understood by the remote service."""

    AIO = "aio"
    """Path inside a file store that can presign URLs (e.g. Adobe I/O Files, S3)."""
    ADOBE = "adobe"
    """Path inside Creative Cloud."""
    EXTERNAL = "external"
    """Presigned GET/PUT URL, e.g. AWS S3."""
    AZURE = "azure"
    """Azure SAS (Shared Access Signature) URL."""
    DROPBOX = "dropbox"
    """Temporary Dropbox upload/download link."""


class MimeType(str, Enum):
    """Output formats supported by the rendition endpoints."""

    DNG = "image/x-adobe-dng"
    JPEG = "image/jpeg"
    PNG = "image/png"
    PSD = "image/vnd.adobe.photoshop"
    TIFF = "image/tiff"


class JobOutputStatus(str, Enum):
    """Lifecycle states reported for each job output."""

    PENDING = "pending"
    RUNNING = "running"
    UPLOADING = "uploading"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


TERMINAL_STATUSES = frozenset({JobOutputStatus.SUCCEEDED.value, JobOutputStatus.FAILED.value})


class PngCompression(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class Colorspace(str, Enum):
    BITMAP = "bitmap"
    GREYSCALE = "greyscale"
    INDEXED = "indexed"
    RGB = "rgb"
    CMYK = "cmyk"
    MULTICHANNEL = "multichannel"
    DUOTONE = "duotone"
    LAB = "lab"


class StandardIccProfileNames(str, Enum):
    ADOBE_RGB_1998 = "Adobe RGB (1998)"
    APPLE_RGB = "Apple RGB"
    COLORMATCH_RGB = "ColorMatch RGB"
    SRGB = "sRGB IEC61966-2.1"
    DOTGAIN_10 = "Dot Gain 10%"
    DOTGAIN_15 = "Dot Gain 15%"
    DOTGAIN_20 = "Dot Gain 20%"
    DOTGAIN_25 = "Dot Gain 25%"
    DOTGAIN_30 = "Dot Gain 30%"
    GRAY_GAMMA_18 = "Gray Gamma 1.8"
    GRAY_GAMMA_22 = "Gray Gamma 2.2"


class WhiteBalance(str, Enum):
    AS_SHOT = "As Shot"
    AUTO = "Auto"
    CLOUDY = "Cloudy"
    CUSTOM = "Custom"
    DAYLIGHT = "Daylight"
    FLASH = "Flash"
    FLUORESCENT = "Fluorescent"
    SHADE = "Shade"
    TUNGSTEN = "Tungsten"


class ManageMissingFonts(str, Enum):
    """Action taken when a document references fonts that are not available."""

    USE_DEFAULT = "useDefault"
    FAIL = "fail"


class BackgroundFill(str, Enum):
    WHITE = "white"
    BACKGROUND_COLOR = "backgroundColor"
    TRANSPARENT = "transparent"


class LayerType(str, Enum):
    LAYER = "layer"
    TEXT_LAYER = "textLayer"
    ADJUSTMENT_LAYER = "adjustmentLayer"
    LAYER_SECTION = "layerSection"
    SMART_OBJECT = "smartObject"
    BACKGROUND_LAYER = "backgroundLayer"
    FILL_LAYER = "fillLayer"


class BlendMode(str, Enum):
    NORMAL = "normal"
    DISSOLVE = "dissolve"
    DARKEN = "darken"
    MULTIPLY = "multiply"
    COLOR_BURN = "colorBurn"
    LINEAR_BURN = "linearBurn"
    DARKER_COLOR = "darkerColor"
    LIGHTEN = "lighten"
    SCREEN = "screen"
    COLOR_DODGE = "colorDodge"
    LINEAR_DODGE = "linearDodge"
    LIGHTER_COLOR = "lighterColor"
    OVERLAY = "overlay"
    SOFT_LIGHT = "softLight"
    HARD_LIGHT = "hardLight"
    VIVID_LIGHT = "vividLight"
    LINEAR_LIGHT = "linearLight"
    PIN_LIGHT = "pinLight"
    HARD_MIX = "hardMix"
    DIFFERENCE = "difference"
    EXCLUSION = "exclusion"
    SUBTRACT = "subtract"
    DIVIDE = "divide"
    HUE = "hue"
    SATURATION = "saturation"
    COLOR = "color"
    LUMINOSITY = "luminosity"


class TextOrientation(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class ParagraphAlignment(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFY = "justify"
    JUSTIFY_LEFT = "justifyLeft"
    JUSTIFY_CENTER = "justifyCenter"
    JUSTIFY_RIGHT = "justifyRight"


class HorizontalAlignment(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class VerticalAlignment(str, Enum):
    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"
