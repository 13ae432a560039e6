import argparse
from pathlib import Path

from figref import FigrefConfig, process_file

if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("-o", type=str, default="./examples/output/waves.md")
    parser.add_argument("--numbering", type=str, default="arabic")
    args = parser.parse_args()

    output = Path(args.o)
    output.parent.mkdir(parents=True, exist_ok=True)

    processed = process_file(
        "./examples/waves.md",
        str(output),
        FigrefConfig(numbering=args.numbering),
    )
    for label, number in processed.figures.items():
        print(f"{label}: {number}")
