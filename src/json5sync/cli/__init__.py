# topmark:header:start
#
#   project      : json5sync
#   file         : __init__.py
#   file_relpath : src/json5sync/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click command-line interface for json5sync."""
