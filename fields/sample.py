"""Sample business record used when no record file is configured."""

from __future__ import annotations

from typing import Any


def sample_business_record() -> dict[str, Any]:
    """Return a fresh copy of the sample business record.

    Returns:
        A nested record with revenue, expenses, customers, products and
        performance sections.
    """

    return {
        "id": "business-1",
        "name": "Acme Corporation",
        "revenue": {
            "total": 1250000,
            "byQuarter": {"Q1": 280000, "Q2": 310000, "Q3": 350000, "Q4": 310000},
            "byProduct": {
                "Product A": 450000,
                "Product B": 320000,
                "Product C": 280000,
                "Product D": 200000,
            },
        },
        "expenses": {
            "total": 780000,
            "byCategory": {
                "Research & Development": 250000,
                "Marketing": 180000,
                "Operations": 220000,
                "Administration": 130000,
            },
            "byQuarter": {"Q1": 180000, "Q2": 195000, "Q3": 210000, "Q4": 195000},
        },
        "customers": {
            "total": 5800,
            "new": 1200,
            "returning": 4600,
            "demographics": {
                "age": {"18-24": 870, "25-34": 1740, "35-44": 1450, "45-54": 1160, "55+": 580},
                "location": {"North America": 2900, "Europe": 1450, "Asia": 870, "Other Regions": 580},
                "gender": {"Male": 3132, "Female": 2668},
            },
        },
        "products": {
            "total": 24,
            "topSelling": [
                {"id": "prod-1", "name": "Premium Widget", "sales": 1200, "revenue": 240000},
                {"id": "prod-2", "name": "Standard Widget", "sales": 1800, "revenue": 180000},
                {"id": "prod-3", "name": "Basic Widget", "sales": 2400, "revenue": 120000},
                {"id": "prod-4", "name": "Widget Accessory", "sales": 3600, "revenue": 90000},
            ],
            "categories": {"Premium": 4, "Standard": 8, "Basic": 12},
        },
        "performance": {
            "kpis": {
                "salesGrowth": 12.5,
                "customerRetention": 78.4,
                "averageOrderValue": 215.5,
                "conversionRate": 3.2,
            },
            "targets": {"sales": 12000, "customers": 6500, "revenue": 1500000},
        },
    }
