"""Host adapters driving hexhash editors from UI toolkits."""
