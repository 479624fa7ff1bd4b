"""Authentication and authorization.

Three pieces, leaves first:
1. tokens — issue/verify the signed 7-day identity token
2. dependencies — resolve the requester from header or cookie
3. ownership — decide whether the requester may mutate a resource
"""
