"""Synthetic table data for demos and smoke tests."""

from datetime import date, timedelta
from typing import Any, Dict, List, Optional, Tuple
import numpy as np
from faker import Faker

SAMPLE_HEADERS = ["Date", "Vendor", "Description", "Reference", "Amount"]

# Light fill for every other row
STRIPE_COLOR = (0.93, 0.95, 0.98)


def generate_sample_rows(
    num_rows: int,
    rng: np.random.Generator,
    fake: Optional[Faker] = None,
    start_date: date = date(2025, 1, 1),
) -> List[List[Any]]:
    """Generate ledger-like rows mixing plain and styled cells.

    Descriptions vary in length so that rows wrap to different heights,
    and references are long unbroken tokens that force mid-word splits.
    """
    if fake is None:
        fake = Faker()
        fake.seed_instance(int(rng.integers(0, 2**31)))

    rows: List[List[Any]] = []
    current_date = start_date
    total = 0.0

    for i in range(num_rows):
        current_date = current_date + timedelta(days=int(rng.integers(0, 4)))
        amount = float(rng.uniform(25, 12500))
        total += amount

        description = fake.sentence(nb_words=int(rng.integers(3, 25)))
        reference = fake.sha1() if rng.random() < 0.2 else f"INV-{rng.integers(10000, 99999)}"

        amount_cell: Dict[str, Any] = {"text": f"{amount:,.2f}", "align": "center"}
        row: List[Any] = [
            current_date.strftime("%m/%d/%y"),
            fake.company(),
            description,
            reference,
            amount_cell,
        ]
        if i % 2 == 1:
            row = [
                {**cell, "backgroundColor": STRIPE_COLOR} if isinstance(cell, dict)
                else {"text": cell, "backgroundColor": STRIPE_COLOR}
                for cell in row
            ]
        rows.append(row)

    if num_rows > 0:
        rows.append([
            {"text": "TOTAL", "bold": True},
            {"text": f"{total:,.2f}", "bold": True, "align": "center", "foregroundColor": (0.1, 0.2, 0.5)},
        ])

    return rows


def generate_sample_table(
    num_rows: int,
    seed: int = 42,
) -> Tuple[List[str], List[List[Any]]]:
    """Return (headers, rows) for a reproducible synthetic table."""
    rng = np.random.default_rng(seed)
    fake = Faker()
    fake.seed_instance(int(rng.integers(0, 2**31)))
    return list(SAMPLE_HEADERS), generate_sample_rows(num_rows, rng, fake)
