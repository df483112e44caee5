"""Account service: validated accounts, sign-up, lookup and their HTTP API."""