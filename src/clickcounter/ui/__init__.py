"""Server-rendered click counter UI.

- full page at ``/`` rendered with Jinja2
- ``/clicked`` returns only the counter fragment, swapped in place by htmx
- stylesheet generated by the Tailwind compiler and served from ``/static``
"""
