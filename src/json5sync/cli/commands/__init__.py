# topmark:header:start
#
#   project      : json5sync
#   file         : __init__.py
#   file_relpath : src/json5sync/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""json5sync CLI subcommands."""
