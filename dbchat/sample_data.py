"""Built-in sample datasets.

Pre-computed results keep demo queries instant and deterministic. Every
canonical query's ``result_key`` points at an entry in the dataset's ``data``.
"""

ECOMMERCE = {
    "id": "ecommerce",
    "name": "E-commerce",
    "description": "Online retail store with customers, products, orders, and reviews",
    "database_schema": {
        "name": "ecommerce",
        "description": "E-commerce platform schema",
        "tables": [
            {
                "name": "customers",
                "display_name": "Customers",
                "description": "Registered customers",
                "record_count": 10000,
                "columns": [
                    {"name": "customer_id", "type": "UUID", "primary_key": True, "nullable": False},
                    {"name": "email", "type": "VARCHAR(255)", "nullable": False},
                    {"name": "first_name", "type": "VARCHAR(100)"},
                    {"name": "last_name", "type": "VARCHAR(100)"},
                    {"name": "lifetime_value", "type": "DECIMAL(10,2)"},
                    {"name": "order_count", "type": "INTEGER"},
                    {"name": "created_at", "type": "TIMESTAMP"},
                ],
            },
            {
                "name": "products",
                "display_name": "Products",
                "description": "Product catalog",
                "record_count": 500,
                "columns": [
                    {"name": "product_id", "type": "UUID", "primary_key": True, "nullable": False},
                    {"name": "product_name", "type": "VARCHAR(200)"},
                    {"name": "category", "type": "VARCHAR(100)"},
                    {"name": "price", "type": "DECIMAL(10,2)"},
                    {"name": "stock_quantity", "type": "INTEGER"},
                    {"name": "status", "type": "VARCHAR(20)"},
                ],
            },
            {
                "name": "orders",
                "display_name": "Orders",
                "description": "Customer orders",
                "record_count": 50000,
                "columns": [
                    {"name": "order_id", "type": "UUID", "primary_key": True, "nullable": False},
                    {"name": "customer_id", "type": "UUID", "foreign_key": "customers.customer_id"},
                    {"name": "order_date", "type": "DATE"},
                    {"name": "total_amount", "type": "DECIMAL(10,2)"},
                    {"name": "status", "type": "VARCHAR(20)"},
                ],
            },
        ],
    },
    "queries": [
        {
            "id": "top-customers-ltv",
            "name": "Top Customers by Revenue",
            "description": "Identifies your highest-value customers based on lifetime spend",
            "natural_language_patterns": [
                "Show me top customers by revenue",
                "top customers",
                "lifetime value",
            ],
            "sql": (
                "SELECT\n  customer_id,\n  email,\n  first_name,\n  last_name,\n"
                "  lifetime_value,\n  order_count\nFROM customers\n"
                "ORDER BY lifetime_value DESC\nLIMIT 10;"
            ),
            "result_key": "topCustomers",
            "category": "Customer Analytics",
            "columns": [
                {"key": "first_name", "label": "First Name"},
                {"key": "last_name", "label": "Last Name"},
                {"key": "email", "label": "Email"},
                {"key": "lifetime_value", "label": "Lifetime Value", "type": "currency"},
                {"key": "order_count", "label": "Orders", "type": "number"},
            ],
        },
        {
            "id": "revenue-by-category",
            "name": "Revenue by Category",
            "description": "Total sales broken down by product category",
            "natural_language_patterns": [
                "What is our revenue by category?",
                "revenue by category",
            ],
            "sql": (
                "SELECT\n  p.category,\n  SUM(oi.quantity * oi.unit_price) AS revenue,\n"
                "  COUNT(DISTINCT o.order_id) AS orders\nFROM order_items oi\n"
                "JOIN products p ON oi.product_id = p.product_id\n"
                "JOIN orders o ON oi.order_id = o.order_id\n"
                "GROUP BY p.category\nORDER BY revenue DESC;"
            ),
            "result_key": "categoryRevenue",
            "category": "Revenue Analytics",
            "columns": [
                {"key": "category", "label": "Category"},
                {"key": "revenue", "label": "Revenue", "type": "currency"},
                {"key": "orders", "label": "Orders", "type": "number"},
            ],
        },
        {
            "id": "low-inventory",
            "name": "Low Inventory Products",
            "description": "Products that need restocking soon",
            "natural_language_patterns": [
                "Which products are running low on stock?",
                "low inventory",
            ],
            "sql": (
                "SELECT\n  product_name,\n  category,\n  stock_quantity\nFROM products\n"
                "WHERE stock_quantity < 20\nORDER BY stock_quantity ASC;"
            ),
            "result_key": "lowInventory",
            "category": "Inventory",
            "columns": [
                {"key": "product_name", "label": "Product"},
                {"key": "category", "label": "Category"},
                {"key": "stock_quantity", "label": "In Stock", "type": "number"},
            ],
        },
        {
            "id": "order-status",
            "name": "Order Status Distribution",
            "description": "Breakdown of orders by fulfillment status",
            "natural_language_patterns": [
                "Show order status distribution",
                "order status",
            ],
            "sql": (
                "SELECT\n  status,\n  COUNT(*) AS orders\nFROM orders\n"
                "GROUP BY status\nORDER BY orders DESC;"
            ),
            "result_key": "orderStatus",
            "category": "Operations",
            "columns": [
                {"key": "status", "label": "Status", "type": "status"},
                {"key": "orders", "label": "Orders", "type": "number"},
            ],
        },
    ],
    "data": {
        "topCustomers": [
            {"customer_id": "c-1001", "email": "sarah.chen@example.com", "first_name": "Sarah",
             "last_name": "Chen", "lifetime_value": 12450.5, "order_count": 48},
            {"customer_id": "c-1002", "email": "marcus.j@example.com", "first_name": "Marcus",
             "last_name": "Johnson", "lifetime_value": 11280.0, "order_count": 41},
            {"customer_id": "c-1003", "email": "priya.p@example.com", "first_name": "Priya",
             "last_name": "Patel", "lifetime_value": 9875.25, "order_count": 37},
        ],
        "categoryRevenue": [
            {"category": "Electronics", "revenue": 845000.0, "orders": 12500},
            {"category": "Home & Kitchen", "revenue": 412300.0, "orders": 9800},
            {"category": "Apparel", "revenue": 298750.0, "orders": 11200},
        ],
        "lowInventory": [
            {"product_name": "Wireless Earbuds", "category": "Electronics", "stock_quantity": 4},
            {"product_name": "Cast Iron Skillet", "category": "Home & Kitchen", "stock_quantity": 9},
            {"product_name": "Running Jacket", "category": "Apparel", "stock_quantity": 15},
        ],
        "orderStatus": [
            {"status": "delivered", "orders": 38200},
            {"status": "shipped", "orders": 6400},
            {"status": "processing", "orders": 3900},
            {"status": "cancelled", "orders": 1500},
        ],
    },
}

SAAS_ANALYTICS = {
    "id": "saas-analytics",
    "name": "SaaS Analytics",
    "description": "B2B SaaS platform with accounts, users, feature usage, and subscription metrics",
    "database_schema": {
        "name": "saas_analytics",
        "description": "B2B SaaS platform schema",
        "tables": [
            {
                "name": "accounts",
                "display_name": "Accounts",
                "description": "Customer accounts",
                "record_count": 2000,
                "columns": [
                    {"name": "account_id", "type": "UUID", "primary_key": True, "nullable": False},
                    {"name": "company_name", "type": "VARCHAR(200)"},
                    {"name": "plan", "type": "VARCHAR(20)"},
                    {"name": "mrr", "type": "DECIMAL(10,2)"},
                    {"name": "seats", "type": "INTEGER"},
                    {"name": "health_score", "type": "INTEGER"},
                    {"name": "created_at", "type": "TIMESTAMP"},
                ],
            },
            {
                "name": "users",
                "display_name": "Users",
                "description": "Users belonging to accounts",
                "record_count": 15000,
                "columns": [
                    {"name": "user_id", "type": "UUID", "primary_key": True, "nullable": False},
                    {"name": "account_id", "type": "UUID", "foreign_key": "accounts.account_id"},
                    {"name": "email", "type": "VARCHAR(255)"},
                    {"name": "full_name", "type": "VARCHAR(200)"},
                    {"name": "is_active", "type": "BOOLEAN"},
                    {"name": "last_active_at", "type": "TIMESTAMP"},
                ],
            },
        ],
    },
    "queries": [
        {
            "id": "mrr-by-plan",
            "name": "MRR by Plan",
            "description": "Monthly recurring revenue breakdown by subscription plan",
            "natural_language_patterns": ["Show MRR by plan", "mrr by plan"],
            "sql": (
                "SELECT\n  plan,\n  COUNT(*) as accounts,\n  SUM(mrr) as mrr,\n"
                "  ROUND(AVG(mrr), 2) as avg_mrr\nFROM accounts\n"
                "WHERE plan IS NOT NULL\nGROUP BY plan\nORDER BY mrr DESC;"
            ),
            "result_key": "mrrByPlan",
            "category": "Revenue",
            "columns": [
                {"key": "plan", "label": "Plan"},
                {"key": "accounts", "label": "Accounts", "type": "number"},
                {"key": "mrr", "label": "MRR", "type": "currency"},
                {"key": "avg_mrr", "label": "Avg MRR", "type": "currency"},
            ],
        },
        {
            "id": "top-accounts",
            "name": "Top Accounts by MRR",
            "description": "Highest value accounts",
            "natural_language_patterns": ["Show top accounts", "top accounts"],
            "sql": (
                "SELECT\n  account_id,\n  company_name,\n  plan,\n  mrr,\n  seats,\n"
                "  health_score\nFROM accounts\nORDER BY mrr DESC\nLIMIT 10;"
            ),
            "result_key": "topAccounts",
            "category": "Accounts",
            "columns": [
                {"key": "company_name", "label": "Company"},
                {"key": "plan", "label": "Plan"},
                {"key": "mrr", "label": "MRR", "type": "currency"},
                {"key": "seats", "label": "Seats", "type": "number"},
                {"key": "health_score", "label": "Health", "type": "number"},
            ],
        },
        {
            "id": "churn-risk",
            "name": "Churn Risk Accounts",
            "description": "Accounts at risk of churning",
            "natural_language_patterns": ["Show churn risk accounts", "churn risk"],
            "sql": (
                "SELECT\n  account_id,\n  company_name,\n  plan,\n  mrr,\n  health_score\n"
                "FROM accounts\nWHERE health_score < 70\nORDER BY health_score ASC\nLIMIT 10;"
            ),
            "result_key": "churnRisk",
            "category": "Retention",
            "columns": [
                {"key": "company_name", "label": "Company"},
                {"key": "plan", "label": "Plan"},
                {"key": "mrr", "label": "MRR", "type": "currency"},
                {"key": "health_score", "label": "Health", "type": "number"},
            ],
        },
    ],
    "data": {
        "mrrByPlan": [
            {"plan": "enterprise", "accounts": 150, "mrr": 225000, "avg_mrr": 1500},
            {"plan": "professional", "accounts": 450, "mrr": 157500, "avg_mrr": 350},
            {"plan": "starter", "accounts": 800, "mrr": 80000, "avg_mrr": 100},
            {"plan": "free", "accounts": 600, "mrr": 0, "avg_mrr": 0},
        ],
        "topAccounts": [
            {"account_id": "a-001", "company_name": "Globex Corp", "plan": "enterprise",
             "mrr": 4800, "seats": 320, "health_score": 91},
            {"account_id": "a-002", "company_name": "Initech", "plan": "enterprise",
             "mrr": 4200, "seats": 275, "health_score": 84},
            {"account_id": "a-003", "company_name": "Umbrella Labs", "plan": "professional",
             "mrr": 1900, "seats": 96, "health_score": 77},
        ],
        "churnRisk": [
            {"account_id": "a-210", "company_name": "Vandelay Industries", "plan": "starter",
             "mrr": 100, "health_score": 28},
            {"account_id": "a-187", "company_name": "Hooli", "plan": "professional",
             "mrr": 350, "health_score": 41},
        ],
    },
}

SAMPLE_DATASETS = [ECOMMERCE, SAAS_ANALYTICS]
