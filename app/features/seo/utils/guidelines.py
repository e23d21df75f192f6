# Static guidance served by GET /api/seo/recommendations
GENERAL_RECOMMENDATIONS = {
    "metadata": [
        {
            "title": "Title Tag Optimization",
            "description": "Keep title length between 30-60 characters and include primary keyword",
            "importance": "high",
        },
        {
            "title": "Meta Description",
            "description": "Write compelling meta descriptions between 120-160 characters",
            "importance": "high",
        },
    ],
    "content": [
        {
            "title": "Content Length",
            "description": "Aim for at least 300 words of unique, valuable content",
            "importance": "medium",
        },
        {
            "title": "Heading Structure",
            "description": "Use proper H1-H6 hierarchy and include keywords naturally",
            "importance": "high",
        },
    ],
    "technical": [
        {
            "title": "Mobile Optimization",
            "description": "Ensure website is fully responsive and mobile-friendly",
            "importance": "high",
        },
        {
            "title": "Page Speed",
            "description": "Optimize images, leverage caching, and minimize code",
            "importance": "high",
        },
    ],
    "security": [
        {
            "title": "HTTPS Implementation",
            "description": "Secure website with SSL/TLS certificate",
            "importance": "high",
        },
    ],
}
