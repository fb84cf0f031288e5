"""Default configuration values and starter .protopresence.toml template."""

CONFIG_FILENAME = ".protopresence.toml"
BASELINE_FILENAME = ".protopresence-baseline.yaml"

DEFAULT_BASE_REF = "origin/main"
DEFAULT_HEAD_REF = "HEAD"
DEFAULT_CONTEXT_LINES = 10
MIN_CONTEXT_LINES = 10
DEFAULT_PATHSPEC = ("*.proto",)

DEFAULT_TOML = """\
# protopresence configuration
version = "1.0"

[diff]
base = "origin/main"      # compared with `base...head`
head = "HEAD"             # "." = working tree against base
context_lines = 10        # minimum 10
pathspec = ["*.proto"]

[policy]
scope = "scalar"          # scalar | all — "all" also flags message/enum fields

[output]
format = "terminal"       # terminal | json | sarif
show_summary = false

[ignore]
# files = ["proto/vendor/*", "third_party/*"]

[baseline]
path = ".protopresence-baseline.yaml"

[ci]
# annotation_format = "github"   # github | none
"""
