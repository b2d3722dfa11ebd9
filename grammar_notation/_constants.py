"""Common literal values used across grammar_notation.

Section identifiers and default locations live here so the config loader, the
section selector, and tests share one set of values.

Examples
--------
>>> from grammar_notation import _constants
>>> _constants.LINE_TERMINATOR
'LineTerminator'
>>> _constants.START_SECTION.startswith("sec-")
True
"""

DEFAULT_SOURCE_URL = "https://github.com/tc39/ecma262/blob/es2021/spec.html?raw=true"
DEFAULT_CACHE_PATH = "workdir/spec.html"
DEFAULT_ARTIFACT_PATH = "workdir/grammar-notation.json"

START_SECTION = "sec-ecmascript-language-expressions"
EXCLUDED_SECTIONS = (
    "sec-regexp-regular-expression-objects",
    "sec-regular-expressions-patterns",
    "sec-function.prototype.tostring",
    "sec-uri-handling-functions",
)
WEB_SECTIONS = ("sec-additional-ecmascript-features-for-web-browsers",)

LINE_TERMINATOR = "LineTerminator"
