"""Payment service: transactions, gateways with fallback, queue consumer and HTTP API."""