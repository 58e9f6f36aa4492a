"""snig: build a static photo gallery from a directory of JPEGs."""

VERSION = "1.001"
