"""Filenames created by operating systems and tools that nobody wants to keep."""

DEFAULT_JUNK_PATTERNS: tuple[str, ...] = (
    r"^npm-debug\.log$",  # npm error log
    r"^\..*\.swp$",  # vim swap file
    # macOS
    r"^\.DS_Store$",
    r"^\.AppleDouble$",
    r"^\.LSOverride$",
    r"^Icon\r$",  # custom Finder icon
    r"^\._.*",  # resource fork / thumbnail
    r"^\.Spotlight-V100(?:$|/)",
    r"\.Trashes",
    r"^__MACOSX$",
    # Linux
    r"~$",  # backup file
    # Windows
    r"^Thumbs\.db$",
    r"^ehthumbs\.db$",
    r"^[Dd]esktop\.ini$",
    # Synology thumbnail folder
    r"@eaDir$",
)
