namespace("com.example")

with record("Person", doc="A person with a home address") as person:
    person.extends("Base")
    person.required("name", "string")
    person.optional("home", "Address")
    person.optional("work", "Address")
    person.required("suit", "Suit", default="SPADES")
