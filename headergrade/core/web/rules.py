# core/web/rules.py
"""
Built-in header rule definitions.

Each category is an ordered tuple of rule definitions; the order is the
display and report order. The definitions are plain data, turned into
HeaderRule instances by headergrade.core.web.catalog.
"""

MDN = "https://developer.mozilla.org/en-US/docs/Web/HTTP"

SECURITY_RULES = (
    {
        "name": "Content-Security-Policy",
        "key": "content-security-policy",
        "importance": "critical",
        "description": "Content Security Policy helps prevent Cross-Site Scripting (XSS) and data injection attacks by controlling which resources can be loaded by the browser.",
        "recommendation": "Implement a strict Content Security Policy to restrict which resources can be loaded: default-src 'self'; script-src 'self' https://trusted-cdn.com",
        "link": f"{MDN}/CSP",
    },
    {
        "name": "X-XSS-Protection",
        "key": "x-xss-protection",
        "importance": "important",
        "description": "X-XSS-Protection enables the browser's built-in XSS filtering capabilities to prevent some types of cross-site scripting attacks.",
        "recommendation": "Set X-XSS-Protection to 1; mode=block to enable the browser's XSS filter",
        "link": f"{MDN}/Headers/X-XSS-Protection",
    },
    {
        "name": "X-Frame-Options",
        "key": "x-frame-options",
        "importance": "important",
        "description": "X-Frame-Options prevents your site from being embedded in iframes on other domains, protecting against clickjacking attacks.",
        "recommendation": "Set X-Frame-Options to DENY or SAMEORIGIN to prevent your site from being framed",
        "link": f"{MDN}/Headers/X-Frame-Options",
    },
    {
        "name": "X-Content-Type-Options",
        "key": "x-content-type-options",
        "importance": "important",
        "description": "X-Content-Type-Options prevents MIME type sniffing which can lead to security vulnerabilities.",
        "recommendation": "Set X-Content-Type-Options to nosniff to prevent MIME type sniffing",
        "link": f"{MDN}/Headers/X-Content-Type-Options",
    },
    {
        "name": "Strict-Transport-Security",
        "key": "strict-transport-security",
        "importance": "critical",
        "description": "HTTP Strict Transport Security (HSTS) forces browsers to use HTTPS on your site, preventing man-in-the-middle attacks and cookie hijacking.",
        "recommendation": "Set Strict-Transport-Security to max-age=31536000; includeSubDomains; preload to enforce HTTPS for your domain and subdomains",
        "link": f"{MDN}/Headers/Strict-Transport-Security",
    },
    {
        "name": "Referrer-Policy",
        "key": "referrer-policy",
        "importance": "recommended",
        "description": "Referrer-Policy controls how much referrer information is included with requests.",
        "recommendation": "Set Referrer-Policy to no-referrer-when-downgrade or stricter to control information leakage",
        "link": f"{MDN}/Headers/Referrer-Policy",
    },
    {
        "name": "Permissions-Policy",
        "key": "permissions-policy",
        "importance": "recommended",
        "description": "Permissions-Policy (formerly Feature-Policy) provides a mechanism to allow or deny the use of browser features in a document.",
        "recommendation": "Implement Permissions-Policy to restrict access to powerful features",
        "link": f"{MDN}/Headers/Feature-Policy",
    },
    {
        "name": "Cross-Origin-Embedder-Policy",
        "key": "cross-origin-embedder-policy",
        "importance": "optional",
        "description": "Cross-Origin-Embedder-Policy prevents a document from loading any cross-origin resources that don't explicitly grant the document permission.",
        "recommendation": "Consider setting Cross-Origin-Embedder-Policy to require-corp for sensitive applications",
        "link": f"{MDN}/Headers/Cross-Origin-Embedder-Policy",
    },
    {
        "name": "Cross-Origin-Opener-Policy",
        "key": "cross-origin-opener-policy",
        "importance": "optional",
        "description": "Cross-Origin-Opener-Policy allows you to ensure a top-level document does not share a browsing context group with cross-origin documents.",
        "recommendation": "Consider setting Cross-Origin-Opener-Policy to same-origin to isolate your browsing context",
        "link": f"{MDN}/Headers/Cross-Origin-Opener-Policy",
    },
    {
        "name": "Cross-Origin-Resource-Policy",
        "key": "cross-origin-resource-policy",
        "importance": "optional",
        "description": "Cross-Origin-Resource-Policy prevents other domains from reading resources.",
        "recommendation": "Consider setting Cross-Origin-Resource-Policy to same-origin or same-site",
        "link": f"{MDN}/Headers/Cross-Origin-Resource-Policy",
    },
)

PERFORMANCE_RULES = (
    {
        "name": "Cache-Control",
        "key": "cache-control",
        "importance": "critical",
        "description": "Cache-Control defines how, and for how long, a browser or other cache can store a response.",
        "recommendation": "Implement appropriate Cache-Control directives for your assets, such as 'max-age=31536000' for static assets",
        "link": f"{MDN}/Headers/Cache-Control",
    },
    {
        "name": "ETag",
        "key": "etag",
        "importance": "important",
        "description": "ETag provides a mechanism for validating cached resources, enabling conditional requests to save bandwidth.",
        "recommendation": "Enable ETags to allow efficient validation of cached resources",
        "link": f"{MDN}/Headers/ETag",
    },
    {
        "name": "Vary",
        "key": "vary",
        "importance": "important",
        "description": "Vary informs caches how to key their cache entries, allowing different cached responses based on client capabilities.",
        "recommendation": "Use the Vary header with 'Accept-Encoding' to properly handle compressed content, and consider other values based on your content negotiation",
        "link": f"{MDN}/Headers/Vary",
    },
    {
        "name": "Content-Encoding",
        "key": "content-encoding",
        "importance": "recommended",
        "description": "Content-Encoding indicates compression methods applied to the response, reducing payload size.",
        "recommendation": "Enable compression (gzip or brotli) for text-based resources to reduce transfer size",
        "link": f"{MDN}/Headers/Content-Encoding",
    },
    {
        "name": "Transfer-Encoding",
        "key": "transfer-encoding",
        "importance": "optional",
        "description": "Transfer-Encoding specifies transformations applied to the message body during transfer.",
        "recommendation": "Consider using 'chunked' Transfer-Encoding for larger dynamic responses",
        "link": f"{MDN}/Headers/Transfer-Encoding",
    },
)

MAINTAINABILITY_RULES = (
    {
        "name": "Content-Type",
        "key": "content-type",
        "importance": "critical",
        "description": "Content-Type specifies the media type of the resource, ensuring proper handling by clients.",
        "recommendation": "Always set an appropriate Content-Type with charset for text-based resources",
        "link": f"{MDN}/Headers/Content-Type",
    },
    {
        "name": "Accept-Ranges",
        "key": "accept-ranges",
        "importance": "recommended",
        "description": "Accept-Ranges indicates server support for range requests, enabling partial content retrieval.",
        "recommendation": "Enable Accept-Ranges for large resources that might benefit from partial retrieval",
        "link": f"{MDN}/Headers/Accept-Ranges",
    },
    {
        "name": "Server-Timing",
        "key": "server-timing",
        "importance": "optional",
        "description": "Server-Timing communicates timing information for request processing, aiding performance debugging.",
        "recommendation": "Consider implementing Server-Timing to expose server processing metrics for debugging",
        "link": f"{MDN}/Headers/Server-Timing",
    },
)

CLOUDFLARE_RULES = (
    {
        "name": "CF-Cache-Status",
        "key": "cf-cache-status",
        "importance": "optional",
        "description": "Indicates whether an asset was served from Cloudflare cache and its cache status.",
        "recommendation": "This header shows how Cloudflare's cache is handling your content. Values like HIT, MISS, DYNAMIC indicate different caching behaviors.",
        "link": "https://developers.cloudflare.com/cache/concepts/cache-responses/",
    },
    {
        "name": "CF-Ray",
        "key": "cf-ray",
        "importance": "optional",
        "description": "A unique identifier for the request through Cloudflare, useful for troubleshooting.",
        "recommendation": "The presence of this header confirms your site is using Cloudflare. Keep this ID when reporting issues to Cloudflare support.",
        "link": "https://developers.cloudflare.com/fundamentals/get-started/reference/cloudflare-ray-id/",
    },
    {
        "name": "cf-edge-cache",
        "key": "cf-edge-cache",
        "importance": "optional",
        "description": "Indicates whether your content was delivered through a Cloudflare edge server.",
        "recommendation": "This header appears when your content is served through Cloudflare Edge Cache.",
        "link": "https://developers.cloudflare.com/cache/concepts/cache-responses/",
    },
    {
        "name": "cf-apo-via",
        "key": "cf-apo-via",
        "importance": "optional",
        "description": "Indicates that the response was served by Cloudflare Automatic Platform Optimization.",
        "recommendation": "This header appears when using Cloudflare's APO service for faster page loads.",
        "link": "https://developers.cloudflare.com/automatic-platform-optimization/",
    },
    {
        "name": "CF-Worker",
        "key": "cf-worker",
        "importance": "optional",
        "description": "Indicates that the request was processed by a Cloudflare Worker script.",
        "recommendation": "This header shows when your site is using Cloudflare Workers to modify responses.",
        "link": "https://developers.cloudflare.com/workers/",
    },
    {
        "name": "Server",
        "key": "server",
        "importance": "optional",
        "description": "The Server header might indicate Cloudflare is serving your content.",
        "recommendation": "If this header contains 'cloudflare', it confirms you're using their services.",
        "link": "https://developers.cloudflare.com/",
    },
)

DEFAULT_RULES = {
    "security": SECURITY_RULES,
    "performance": PERFORMANCE_RULES,
    "maintainability": MAINTAINABILITY_RULES,
    "cloudflare": CLOUDFLARE_RULES,
}
