"""ViewModel package for console UI state and command surfaces.

Call context:
    ``indavco_admin.app.controller`` builds page viewmodels and
    ``indavco_admin.web_ui.main`` binds NiceGUI widgets to them.

Dependencies:
    Modules in this package depend on domain types and use cases. HTTP and
    persistence stay in adapters.

Responsibilities:
    - Hold form, modal and list state for one resource page.
    - Expose the page callbacks (open create, open edit, submit, delete).
    - Notify views through plain callbacks after state changes.
"""
