namespace("com.example")

with record("Address") as address:
    address.required("street", "string")
    address.required("city", "string")
