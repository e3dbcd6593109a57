from __future__ import annotations

#: Name of the placeholder file created in empty directories of a golden
#: tree, so that git keeps them
EMPTY_DIR_MARKER = ".empty"

#: Header of compiled dconf databases.  Those are machine dependent and are
#: never stored in golden trees
DCONF_DB_MAGIC = b"GVariant"

#: Name of the dconf directory holding the keyfile databases
DCONF_DB_DIRNAME = "db"

#: Suffix of keyfile database directories compiled by ``dconf update``
DCONF_DB_SOURCE_SUFFIX = ".d"

#: Name of the subdirectory, next to a test module, holding its golden trees
GOLDEN_DIRNAME = "golden"

#: Environment variable which, when set to a true value, enables update mode
UPDATE_ENV_VAR = "GOLDTREE_UPDATE"

#: Environment variable to set the level of the ``goldtree`` logger
LOG_LEVEL_ENV_VAR = "GOLDTREE_LOG_LEVEL"

TRUE_VALUES = ("1", "true", "yes", "on")
