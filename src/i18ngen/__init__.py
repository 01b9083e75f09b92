"""i18ngen: machine-translated go-i18n resource files."""

__version__ = "0.1.0"
