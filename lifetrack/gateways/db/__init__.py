"""PostgreSQL repositories, the connection protocol and a SELECT builder."""