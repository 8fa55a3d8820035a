"""Time ordered, unique 64 bit snowflake id generation and decoding."""