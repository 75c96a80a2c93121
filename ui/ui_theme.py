"""ui.ui_theme

Theme constants and CSS for the decision tracer dashboard.
"""

BRAND_BLUE = "#1e40af"

STATUS_COLORS = {
    "success": ("#dcfce7", "#166534"),
    "warning": ("#fef3c7", "#92400e"),
    "error": ("#fee2e2", "#991b1b"),
}


def css() -> str:
    badges = "\n".join(
        f"    .xray-status-{name} {{ background: {bg}; color: {fg}; }}"
        for name, (bg, fg) in STATUS_COLORS.items()
    )
    return f"""
    <style>
    .xray-header {{
        background: white;
        border-bottom: 1px solid #e6e6e6;
        padding: 8px 12px;
        display:flex;
        align-items:center;
        gap:12px;
    }}
    .xray-badge {{
        display:inline-block;
        padding: 2px 8px;
        border-radius: 999px;
        background: {BRAND_BLUE};
        color: white;
        font-size: 12px;
    }}
    .xray-muted {{
        color: #4b4b4b;
        font-size: 13px;
    }}
    .xray-status {{
        display:inline-block;
        padding: 2px 10px;
        border-radius: 999px;
        font-size: 12px;
        font-weight: 600;
    }}
{badges}
    </style>
    """
