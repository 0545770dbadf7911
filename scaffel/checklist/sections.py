# scaffel/checklist/sections.py
"""
Tech-stack aware checklist sections.

Each builder returns grouped tasks for one checklist section. Tasks that
only apply to the chosen stack are flagged ``stack_specific``. Without a
tech stack only the stack-neutral groups are produced.
"""

from scaffel.checklist.items import ChecklistItem, group
from scaffel.parsers.tech_stack import TechStack
from scaffel.planning.schemas import Feature
from scaffel.validation import slugify

REACT_FRAMEWORKS = ("nextjs", "react")


def _stack_items(*texts: str) -> list[ChecklistItem]:
    return [ChecklistItem(text, stack_specific=True) for text in texts]


def database_schema_tasks(feature: Feature, stack: TechStack | None = None) -> list[ChecklistItem]:
    name = feature.name.lower()
    if "auth" in name:
        tables = group(
            "Create authentication tables",
            "users table (if not using Supabase auth)",
            "sessions table (if not using Supabase auth)",
            "password_reset_tokens table",
            "email_verification_tokens table",
            "oauth_accounts table (for OAuth providers)",
        )
    elif "payment" in name:
        tables = group(
            "Create payment tables",
            "subscriptions table (id, user_id, plan_id, status, current_period_start, current_period_end)",
            "invoices table (id, subscription_id, amount, status, due_date)",
            "payment_methods table (id, user_id, provider, provider_id, is_default)",
            "transactions table (id, subscription_id, amount, status, created_at)",
        )
    elif "user" in name:
        tables = group(
            "Create user profile tables",
            "user_profiles table (id, user_id, name, avatar_url, bio, preferences)",
            "user_settings table (id, user_id, key, value)",
        )
    else:
        tables = group(
            "Design database schema",
            f"Create {slugify(feature.name).replace('-', '_')} table",
            "Define primary key (UUID recommended)",
            "Add foreign keys for relationships",
            "Add indexes for frequently queried columns",
            "Add constraints (NOT NULL, UNIQUE, CHECK)",
            "Add timestamps (created_at, updated_at)",
        )

    sections = [
        tables,
        group(
            "Add indexes",
            "Index on foreign keys",
            "Index on frequently queried columns",
            "Composite indexes for common query patterns",
        ),
    ]
    if stack is not None and stack.backend == "supabase":
        sections.append(
            ChecklistItem(
                "Add RLS policies",
                _stack_items(
                    "Enable RLS on all tables",
                    "Create policies for SELECT operations",
                    "Create policies for INSERT operations",
                    "Create policies for UPDATE operations",
                    "Create policies for DELETE operations",
                ),
            )
        )
    sections.append(
        group(
            "Create migration files",
            "Create up migration",
            "Create down migration (rollback)",
            "Test migrations",
        )
    )
    return sections


def api_endpoint_tasks(feature: Feature, stack: TechStack | None = None) -> list[ChecklistItem]:
    name = feature.name.lower()
    slug = slugify(feature.name)
    if "auth" in name:
        endpoints = group(
            "Authentication endpoints",
            "POST /api/auth/signup - User registration",
            "POST /api/auth/signin - User login",
            "POST /api/auth/signout - User logout",
            "GET /api/auth/oauth/:provider - Initiate OAuth flow",
            "GET /api/auth/callback/:provider - OAuth callback handler",
            "POST /api/auth/reset-password - Request password reset",
            "GET /api/auth/me - Get current user",
        )
    elif "payment" in name:
        endpoints = group(
            "Payment endpoints",
            "POST /api/payments/subscriptions - Create subscription",
            "GET /api/payments/subscriptions - List subscriptions",
            "PATCH /api/payments/subscriptions/:id - Update subscription",
            "DELETE /api/payments/subscriptions/:id - Cancel subscription",
            "POST /api/payments/webhooks - Payment provider webhook handler",
            "GET /api/payments/invoices - List invoices",
        )
    else:
        endpoints = group(
            "API endpoints",
            f"GET /api/{slug} - List all items",
            f"GET /api/{slug}/:id - Get single item",
            f"POST /api/{slug} - Create new item",
            f"PATCH /api/{slug}/:id - Update item",
            f"DELETE /api/{slug}/:id - Delete item",
        )

    sections = [
        endpoints,
        ChecklistItem(
            "Request validation",
            [
                group(
                    "Create validation schemas",
                    "Schema for request body",
                    "Schema for request parameters",
                    "Schema for query parameters",
                ),
                group(
                    "Implement validation middleware",
                    "Validate body, parameters and query",
                    "Return 400 status with error details",
                ),
            ],
        ),
        group(
            "Authentication middleware",
            "Extract bearer token from Authorization header",
            "Verify token signature and expiration",
            "Check user permissions for operation",
            "Return 401 for unauthenticated requests",
        ),
        group(
            "Error handling",
            "Handle validation errors (400)",
            "Handle authentication errors (401)",
            "Handle authorization errors (403)",
            "Handle not found errors (404)",
            "Handle server errors (500)",
            "Log errors appropriately",
        ),
    ]
    if stack is not None and stack.framework == "nextjs":
        sections.append(
            ChecklistItem(
                "Next.js API route structure",
                _stack_items(
                    f"Create file: app/api/{slug}/route.ts",
                    "Export async function for each HTTP method",
                    "Parse request body: await request.json()",
                    "Read query parameters from new URL(request.url).searchParams",
                    "Return Response.json(data, { status })",
                ),
            )
        )
    elif stack is not None and stack.framework in ("express", "fastify", "nest"):
        sections.append(
            ChecklistItem(
                f"{stack.framework.capitalize()} routes",
                _stack_items(
                    f"Register /api/{slug} router",
                    "Attach validation and auth middleware to routes",
                    "Map errors to HTTP responses in an error handler",
                ),
            )
        )
    return sections


def component_tasks(feature: Feature, stack: TechStack | None = None) -> list[ChecklistItem]:
    name = feature.name.lower()
    if "auth" in name:
        components = group(
            "Authentication components",
            "LoginForm component (email, password, OAuth buttons)",
            "SignupForm component (email, password, confirm password)",
            "PasswordResetForm component",
            "AuthProvider context (manages auth state)",
            "ProtectedRoute component (redirects if not authenticated)",
        )
    elif "payment" in name:
        components = group(
            "Payment components",
            "SubscriptionForm component",
            "PaymentMethodForm component",
            "InvoiceList component",
            "BillingHistory component",
        )
    else:
        title = feature.name
        components = group(
            f"{title} components",
            f"{title}List component (display list)",
            f"{title}Item component (display single item)",
            f"{title}Form component (create/edit)",
            f"{title}Detail component (view details)",
        )

    sections = [
        components,
        group(
            "Component structure",
            "Define typed props",
            "Add loading states",
            "Add error states",
            "Add empty states",
            "Add success states",
        ),
    ]
    if stack is not None and stack.framework in REACT_FRAMEWORKS:
        sections.append(
            ChecklistItem(
                "React patterns",
                _stack_items(
                    "Use React hooks for state management",
                    "Implement error boundaries",
                    "Add loading skeletons",
                    "Optimize re-renders (useMemo, useCallback)",
                ),
            )
        )
    elif stack is not None and stack.framework in ("vue", "angular"):
        sections.append(
            ChecklistItem(
                f"{stack.framework.capitalize()} patterns",
                _stack_items(
                    "Keep state in a store shared across views",
                    "Add loading skeletons",
                    "Handle component-level errors",
                ),
            )
        )
    if stack is not None and stack.styling == "tailwind":
        sections.append(
            ChecklistItem(
                "Styling",
                _stack_items(
                    "Use Tailwind utility classes",
                    "Use semantic design tokens",
                    "Ensure responsive design",
                    "Add dark mode support",
                ),
            )
        )
    return sections


def stack_prerequisites(category: str, stack: TechStack | None = None) -> list[ChecklistItem]:
    """Stack setup that must exist before a feature is started."""
    if stack is None:
        return []

    prerequisites: list[ChecklistItem] = []
    if category == "foundation" and stack.framework == "nextjs":
        prerequisites += _stack_items("Next.js project initialized")
    if category == "foundation" and stack.language == "typescript":
        prerequisites += _stack_items("TypeScript configured")
    database = "PostgreSQL database created" if stack.database == "postgresql" else f"{stack.database} database created"
    prerequisites += _stack_items(database)
    if stack.backend == "supabase":
        prerequisites += _stack_items("Supabase project created", "Supabase client configured")
    elif stack.backend == "firebase":
        prerequisites += _stack_items("Firebase project created", "Firebase SDK configured")
    return prerequisites


def stack_testing_tasks(stack: TechStack | None = None) -> list[ChecklistItem]:
    if stack is None or stack.framework not in REACT_FRAMEWORKS:
        return []
    return _stack_items(
        "Component tests: rendering",
        "Component tests: user interactions",
        "Component tests: loading and error states",
    )


__all__ = [
    "api_endpoint_tasks",
    "component_tasks",
    "database_schema_tasks",
    "stack_prerequisites",
    "stack_testing_tasks",
]
