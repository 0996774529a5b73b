# aac_autocompleter/utils - config, logging and persistence helpers.
# Import the submodules directly; nothing is re-exported here.
