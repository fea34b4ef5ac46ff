"""
Purchases App - Scanned Purchase Ledger

This app records purchases made by scanning a product barcode and accrues
loyalty points on the client's membership in the same transaction.

Key Features:
- Purchase recording by product ID or by scanned barcode
- Ambiguous-barcode reporting across a client's environments
- Prices and product names frozen at purchase time
- Append-only ledger (purchases are never updated or deleted)

Architecture:
- Models: Purchase
- Services: PurchaseRecorder
- Views: RESTful API with a ViewSet and a scan action
- Exceptions: Domain exception hierarchy on top of apps.core
"""
