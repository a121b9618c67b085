"""cvecat/ -- Fetch CVE JSON 5 records and render them through a template.

Layer rule: cvecat/ is the kernel. main.py imports from here, never the
other way around.
"""

__version__ = "0.4.0"
