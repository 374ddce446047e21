"""Services Layer — repositories, referential guards, paging and the admin pipeline.

Invariants:
    - Every store failure leaves this layer as a typed BackofficeError
    - Gate -> validate -> store ordering lives in resource_admin only
"""
