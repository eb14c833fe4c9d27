"""Package entry point for ``python -m subtitle_converter``.

WHY: Users run the converter as ``python -m subtitle_converter input.srt``
for a one-off conversion, or ``python -m subtitle_converter --serve`` to
start the HTTP API.

HOW: Delegates to the CLI's main(), which owns both the conversion
arguments and the ``--serve`` switch, so the console script and ``-m``
behave the same.
"""

if __name__ == "__main__":
    from subtitle_converter.cli import main
    main()
