# gerber_preview/checks/__init__.py

# (check id, implementing module); list order is the order of the DRC battery.
BATTERY = (
    ("board_dimensions", "impl_board_dimensions"),
    ("layer_count", "impl_layer_count"),
    ("gerber_files", "impl_gerber_files"),
    ("drill_file", "impl_drill_file"),
    ("board_outline", "impl_board_outline"),
    ("copper_layers", "impl_copper_layers"),
)


def _ensure_impls_loaded() -> None:
    """
    Import implemented checks so they register themselves.
    """
    from importlib import import_module

    for _, module in BATTERY:
        import_module(f"{__name__}.{module}")


__all__ = ["BATTERY", "_ensure_impls_loaded"]
