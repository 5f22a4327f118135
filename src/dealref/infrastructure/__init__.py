"""Infrastructure layer — reading and decoding the deal record stream."""
