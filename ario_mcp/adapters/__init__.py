"""MCP Adapter Modules

This package contains the MCP adapters organized by functionality:
- utils: Shared response formatting and resource-URI parsing
- transaction: Raw transaction data
- gateway: Gateway info documents
- graphql: GraphQL passthrough
- registry: ARIO gateway registry and ArNS records
- ant: ANT (Arweave Name Token) reads
- parquet: SQL over local Parquet files
"""
