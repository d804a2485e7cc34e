"""Storage protocols and the context-bound database and user."""