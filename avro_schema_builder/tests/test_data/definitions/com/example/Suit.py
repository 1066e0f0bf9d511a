namespace("com.example")

enum("Suit", "SPADES", "HEARTS", "DIAMONDS", "CLUBS")
