"""Single-page map export; the implementation lives in `sidewalk_gaps.export_map`."""

from sidewalk_gaps.export_map import main


if __name__ == "__main__":
    main()
