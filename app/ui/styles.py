# -----------------------------------------------------------------------------
# (c) 2026 Andreas Wagner. All Rights Reserved.
#
# This code is part of the Tax Calculator project.
# Unauthorized usage or distribution is not permitted.
# -----------------------------------------------------------------------------

"""
Application Styles and Design Tokens
"""

APP_STYLE = """
<style>
    @import url('https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&family=JetBrains+Mono:wght@400;500;700&display=swap');

    .block-container {
        padding-top: 3rem !important;
        padding-bottom: 3rem !important;
        max-width: 1100px;
    }

    :root {
        --card-border: rgba(75, 125, 163, 0.35);
        --text-primary: #ecf3fa;
        --text-secondary: #a8b5c8;
        --accent-primary: #4B7DA3;

        --font-primary: 'Inter', sans-serif;
        --font-mono: 'JetBrains Mono', monospace;

        --font-size-sm: 0.75rem;
        --font-size-base: 0.85rem;
        --font-size-lg: 1.1rem;
        --font-size-xl: 1.25rem;

        --radius: 10px;
    }

    /* KPI board: base / tax / total / effective rate */
    .kpi-board {
        border: 1px solid rgba(60, 66, 75, 1) !important;
        border-radius: var(--radius);
        padding: 1rem;
        box-shadow: 0 4px 24px rgba(0, 0, 0, 0.2);
        margin: 1rem 0 1.5rem 0;
    }

    .kpi-header {
        font-family: var(--font-mono);
        font-size: var(--font-size-lg);
        font-weight: 600;
        color: var(--text-primary);
        margin-bottom: 1.25rem;
    }

    .kpi-grid {
        display: grid;
        grid-template-columns: repeat(4, 1fr);
        gap: 1rem;
    }

    .kpi-item {
        border-left: 1px solid rgba(90, 122, 143, 0.35);
        padding: 0.25rem 0.85rem 0.25rem 1.25rem;
        min-height: 50px;
    }

    .kpi-label {
        font-family: var(--font-primary);
        font-size: var(--font-size-sm);
        font-weight: 500;
        color: var(--text-secondary);
        text-transform: uppercase;
        letter-spacing: 0.05em;
        margin-bottom: 2px;
        white-space: nowrap;
    }

    .kpi-value-row {
        display: flex;
        align-items: center;
        gap: 12px;
    }

    .kpi-value {
        font-family: var(--font-mono);
        font-size: var(--font-size-xl);
        font-weight: 700;
        color: #ffffff;
        line-height: 1;
        font-variant-numeric: tabular-nums;
    }

    .metric-delta {
        font-family: var(--font-mono);
        font-size: var(--font-size-base);
        font-weight: 600;
        padding: 2px 8px;
        border-radius: var(--radius);
        white-space: nowrap;
    }

    .delta-pos {
        color: #10b981;
        background-color: rgba(16, 185, 129, 0.1);
        border: 1px solid rgba(16, 185, 129, 0.2);
    }

    .delta-neg {
        color: #ef4444;
        background-color: rgba(239, 68, 68, 0.1);
        border: 1px solid rgba(239, 68, 68, 0.2);
    }

    .delta-neu {
        color: #9CA3AF;
        background-color: rgba(156, 163, 175, 0.1);
        border: 1px solid rgba(156, 163, 175, 0.2);
    }

    /* Rule explanation under the KPIs */
    .tax-message {
        font-family: var(--font-primary);
        font-size: var(--font-size-base);
        color: var(--text-primary);
        border-left: 3px solid var(--accent-primary);
        padding: 0.5rem 1rem;
        margin-bottom: 1.5rem;
    }

    @media only screen and (max-width: 768px) {
        .kpi-grid {
            grid-template-columns: repeat(2, 1fr);
        }
        .kpi-value { font-size: 1.0rem; }
        .kpi-label { font-size: 0.7rem; }
    }
</style>
"""
