record("Thing").required("two", "int")
