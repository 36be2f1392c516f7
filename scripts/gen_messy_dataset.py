#!/usr/bin/env python3
"""Generate synthetic messy customer spreadsheets for manual runs.

Each layout reproduces a shape seen in real uploads:
- split:     First Name / Last Name / Street / City / State / Zip columns
- combined:  single "Customer Name" and "Full Address" columns
- cryptic:   abbreviated headers (tel, amt, qty) plus an ID column
              that must never be mapped to Amount

Output is .csv or .xlsx depending on the file extension.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd

FIRST_NAMES = ["John", "Mary", "Ana", "Luis", "Wei", "Priya", "Tom", "Fatima"]
LAST_NAMES = ["Smith", "Garcia", "Chen", "Patel", "Johnson", "Okafor", "Kim"]
STREETS = ["Main St", "Oak Ave", "Pine Rd", "Maple Dr", "Elm Blvd"]
CITIES = [("Springfield", "IL"), ("Austin", "TX"), ("New York", "NY"), ("Denver", "CO")]
PRODUCTS = ["Widget", "Gadget", "Gizmo", "Doohickey", "Sprocket"]
LAYOUTS = ("split", "combined", "cryptic")


def generate_frame(rows: int, layout: str, seed: int = 42, blank_ratio: float = 0.05) -> pd.DataFrame:
    """Build one messy table; `blank_ratio` of cells in optional columns are left empty."""
    rng = np.random.default_rng(seed)

    first = rng.choice(FIRST_NAMES, rows)
    last = rng.choice(LAST_NAMES, rows)
    house = rng.integers(1, 9999, rows)
    street = rng.choice(STREETS, rows)
    city_idx = rng.integers(0, len(CITIES), rows)
    postal = rng.integers(10000, 99999, rows)
    phone = [f"({a}) {b}-{c}" for a, b, c in zip(
        rng.integers(200, 999, rows), rng.integers(200, 999, rows), rng.integers(1000, 9999, rows)
    )]
    email = [f"{f.lower()}.{l.lower()}@example.com" for f, l in zip(first, last)]
    amount = np.round(rng.uniform(5, 2500, rows), 2)
    qty = rng.integers(1, 50, rows)
    age = rng.integers(18, 90, rows)
    gender = rng.choice(["M", "F", "Male", "Female"], rows)
    dates = pd.date_range("2024-01-01", periods=365).strftime("%Y-%m-%d").to_numpy()
    order_date = rng.choice(dates, rows)
    product = rng.choice(PRODUCTS, rows)

    city = [CITIES[i][0] for i in city_idx]
    state = [CITIES[i][1] for i in city_idx]

    if layout == "split":
        data = {
            "First Name": first,
            "Last Name": last,
            "Street": [f"{h} {s}" for h, s in zip(house, street)],
            "City": city,
            "State": state,
            "Zip": postal,
            "Phone": phone,
            "Email": email,
            "Order Date": order_date,
            "Product": product,
            "Qty": qty,
            "Total": [f"${a:,.2f}" for a in amount],
        }
    elif layout == "combined":
        data = {
            "Customer Name": [f"{f} {l}" for f, l in zip(first, last)],
            "Full Address": [
                f"{h} {s}, {c}, {st} {p}" for h, s, c, st, p in zip(house, street, city, state, postal)
            ],
            "E-mail": email,
            "Mobile": phone,
            "Purchase Date": order_date,
            "Item": product,
            "Amount": amount,
            "Age": age,
            "Sex": gender,
        }
    elif layout == "cryptic":
        data = {
            "ID": np.arange(1, rows + 1),
            "customer": [f"{l.upper()}, {f}" for f, l in zip(first, last)],
            "tel": phone,
            "mail": email,
            "dt": order_date,
            "amt": amount,
            "qty": qty,
            "Company": rng.choice(["Acme", "Globex", "Initech"], rows),
        }
    else:
        raise ValueError(f"unknown layout: {layout}")

    df = pd.DataFrame(data).astype(object)
    optional = [c for c in df.columns if c not in ("First Name", "Last Name", "Customer Name", "customer", "ID")]
    mask = rng.random((rows, len(optional))) < blank_ratio
    for j, col in enumerate(optional):
        df.loc[mask[:, j], col] = ""
    return df


def write_frame(df: pd.DataFrame, output_path: Path) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    if output_path.suffix.lower() == ".csv":
        df.to_csv(output_path, index=False)
    else:
        df.to_excel(output_path, index=False, engine="openpyxl")
    print(f"Created {output_path} ({len(df)} rows, {len(df.columns)} columns)")


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate messy customer spreadsheets")
    parser.add_argument("output", type=Path, help="Output file path (.csv or .xlsx)")
    parser.add_argument("--rows", type=int, default=250, help="Number of data rows (default: 250)")
    parser.add_argument("--layout", choices=LAYOUTS, default="split", help="Header layout (default: split)")
    parser.add_argument("--blank-ratio", type=float, default=0.05, help="Share of blank optional cells")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1
    if args.output.suffix.lower() not in (".csv", ".xlsx"):
        print("Error: output must end in .csv or .xlsx", file=sys.stderr)
        return 1

    write_frame(generate_frame(args.rows, args.layout, args.seed, args.blank_ratio), args.output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
