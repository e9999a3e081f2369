"""Task management backend: checklist progress, dashboards and reports."""
