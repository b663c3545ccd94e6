"""
Text rendering for chat responses: the markdown analysis block handed to the
analyst agent, follow-up suggestions, and the fixed off-topic / fallback
answers.
"""

from typing import Dict, List, Optional

from .intents import GET_PRODUCT_INSIGHTS, GET_SALES_ANALYTICS, GET_SALES_DATA
from .utils import distinct_values, format_money

OFF_TOPIC_ANSWER = """I'm a specialized AI sales analyst focused exclusively on helping you analyze your sales data and business performance.

I can help you with:
📊 Sales performance analysis
📈 Revenue trends and patterns
🏙️ Regional and city-based insights
📦 Product category comparisons
🏆 Top performing products and regions
📉 Growth and performance metrics
🗺️ Geographic coverage analysis
⚠️ Underperforming areas analysis

Please ask me about your sales data, and I'll create beautiful visualizations and insights for you!

**Try asking:**
• "Show me least performing cities"
• "Which states are underperforming?"
• "Top vs worst performing products"
• "Compare California vs Texas performance"
• "Identify improvement opportunities\""""

OFF_TOPIC_SUGGESTIONS = [
    "Show me least performing cities",
    "Which states are underperforming?",
    "Top vs worst performing products",
    "Compare California vs Texas performance",
    "Identify improvement opportunities",
]

LOW_IMPROVEMENTS = [
    "Focus marketing efforts on underperforming cities",
    "Analyze successful strategies from top performers",
    "Consider product mix adjustments",
    "Investigate local market conditions",
    "Implement targeted promotional campaigns",
]
HIGH_SUCCESS_FACTORS = [
    "Replicate successful strategies in other markets",
    "Increase investment in high-performing areas",
    "Expand product offerings in successful regions",
    "Study customer preferences in top markets",
    "Scale winning campaigns to other locations",
]
PRODUCT_IMPROVEMENTS = [
    "Review pricing strategy for underperformers",
    "Consider product bundling opportunities",
    "Analyze customer feedback and reviews",
    "Evaluate marketing campaigns effectiveness",
    "Assess inventory management",
    "Consider seasonal factors",
]
PRODUCT_SUCCESS = [
    "Increase inventory for high-demand products",
    "Expand successful product lines",
    "Create product bundles with top performers",
    "Enhance marketing for bestsellers",
    "Study customer preferences",
    "Consider premium variants",
]


def fallback_answer(result: Dict) -> str:
    total = result['summary']['totalSales']
    return (f"I found sales data with ${format_money(total)} in total sales! "
            "Check out the dashboard for detailed visualizations.")


def _bullets(lines: List[str]) -> str:
    return '\n'.join(f"• {line}" for line in lines)


def _insight_lines(result: Dict, default: str) -> str:
    return _bullets(result.get('insights') or []) or default


def _sales_overview(result: Dict, params: Dict) -> str:
    chart_data = result.get('chartData') or {}
    states = distinct_values(result.get('mapData') or [], 'state')
    cities = distinct_values(chart_data.get('cityBreakdown') or [], 'city')
    summary = result['summary']

    heading = "📊 **Sales Performance Analysis**"
    if params.get('state'):
        heading += f" for {params['state']}"
    if params.get('category'):
        heading += f" in {params['category']}"

    more = f" and {len(states) - 5} more" if len(states) > 5 else ""
    categories = _bullets([
        f"{c['category']}: ${format_money(c['sales'])}"
        for c in (chart_data.get('categoryBreakdown') or [])[:3]
    ]) or "Category data loading..."

    return f"""{heading}

**💰 Key Metrics:**
• Total Revenue: ${format_money(summary['totalSales'])}
• Total Transactions: {summary['totalTransactions']:,}
• Average Order Value: ${format_money(summary['avgTransactionValue'])}

**🏢 Geographic Coverage:**
• We're selling in {len(states)} states: {', '.join(states[:5])}{more}
• Top cities include: {', '.join(cities[:5])}

**📈 Top Categories:**
{categories}

**🔍 Key Insights:**
{_insight_lines(result, 'Analysis complete!')}"""


def _state_totals(map_data: List[Dict]) -> List[Dict]:
    totals = {}
    for entry in map_data:
        state = entry.get('state') or 'Unknown'
        totals[state] = totals.get(state, 0) + entry.get('sales', 0)
    return [{'state': s, 'sales': v} for s, v in totals.items()]


def _performance_ranking(result: Dict, params: Dict) -> str:
    lowest = params.get('performanceType') == 'lowest'
    cities = sorted((result.get('chartData') or {}).get('cityBreakdown') or [],
                    key=lambda c: c['sales'], reverse=not lowest)
    states = sorted(_state_totals(result.get('mapData') or []),
                    key=lambda s: s['sales'], reverse=not lowest)

    city_mark = ' ⚠️' if lowest else ' 🏆'
    state_mark = ' 📉' if lowest else ' 📈'
    city_lines = '\n'.join(
        f"{i}. {c['city']}: ${format_money(c['sales'])}{city_mark}" for i, c in enumerate(cities[:10], 1)
    )
    state_lines = '\n'.join(
        f"{i}. {s['state']}: ${format_money(s['sales'])}{state_mark}" for i, s in enumerate(states[:10], 1)
    )

    return f"""🎯 **{'Lowest' if lowest else 'Highest'} Performance Analysis**

**📊 {'Underperforming' if lowest else 'Top Performing'} Areas:**

**🏙️ Cities {'Needing Attention' if lowest else 'Leading Sales'}:**
{city_lines}

**📍 States Performance:**
{state_lines}

**💡 {'Improvement Opportunities' if lowest else 'Success Factors'}:**
{_bullets(LOW_IMPROVEMENTS if lowest else HIGH_SUCCESS_FACTORS)}

**🎯 Action Items:**
{_insight_lines(result, 'Performance analysis complete!')}"""


def _geographic(result: Dict) -> str:
    chart_data = result.get('chartData') or {}
    states = distinct_values(result.get('mapData') or [], 'state')
    cities = distinct_values(chart_data.get('cityBreakdown') or [], 'city')
    top_cities = '\n'.join(
        f"  • {c['city']}: ${format_money(c['sales'])}" for c in (chart_data.get('cityBreakdown') or [])[:5]
    ) or "City data loading..."

    return f"""🗺️ **Geographic Sales Analysis**

**📍 States Analysis:**
• Total States: {len(states)}
• Active Markets: {', '.join(states)}

**🏙️ Cities Analysis:**
• Total Cities: {len(cities)}
• Top Performing Cities:
{top_cities}

**🎯 Insights:**
{_insight_lines(result, 'Geographic analysis complete!')}"""


def _product_performance(result: Dict, params: Dict) -> str:
    low = (params.get('insightType') or 'top_products') == 'poor_products'
    mark = ' 📉' if low else ' 🚀'
    products = '\n'.join(
        f"{i}. {p['product']}: ${format_money(p['sales'])}{mark}"
        for i, p in enumerate((result.get('products') or [])[:8], 1)
    ) or "Product analysis complete!"

    return f"""🛍️ **Product Performance Insights** {'(Low Performers)' if low else '(Top Performers)'}

**{'⚠️ Underperforming Products' if low else '🏆 Top Products'}:**
{products}

**💡 {'Improvement Strategies' if low else 'Success Recommendations'}:**
{_bullets(PRODUCT_IMPROVEMENTS if low else PRODUCT_SUCCESS)}

**🎯 Actionable Insights:**
{_insight_lines(result, 'Product recommendations ready!')}"""


def build_context(function_name: Optional[str], params: Dict, result: Dict) -> str:
    """Render an aggregation result as the markdown block sent to the analyst agent."""
    if function_name == GET_SALES_DATA:
        return _sales_overview(result, params)
    if function_name == GET_SALES_ANALYTICS:
        analysis_type = params.get('analysisType')
        if analysis_type == 'performance_analysis':
            return _performance_ranking(result, params)
        if analysis_type == 'location_analysis':
            return _geographic(result)
        return f"📊 **Advanced Analytics**\n\n{_insight_lines(result, 'Analysis completed successfully')}"
    if function_name == GET_PRODUCT_INSIGHTS:
        return _product_performance(result, params)
    return ''


def build_suggestions(query: str, params: Dict) -> List[str]:
    """Five follow-up questions picked from the wording of the current one."""
    q = query.lower()

    if any(word in q for word in ('least', 'worst', 'poor', 'low')):
        return [
            "Show me top performing cities for comparison",
            "Which products need improvement?",
            "Identify underperforming regions",
            "Compare worst vs best performers",
            "Improvement strategies for weak areas",
        ]
    if any(word in q for word in ('top', 'best', 'highest')):
        return [
            "Show me least performing areas",
            "Compare best vs worst performers",
            "Identify success factors",
            "Replicate winning strategies",
            "Expand successful products",
        ]
    if 'state' in q:
        return [
            "Which states have lowest sales?",
            "Show me California vs Texas comparison",
            "Regional performance analysis",
            "Top cities in each state",
            "State-wise improvement opportunities",
        ]
    if 'city' in q or 'cities' in q:
        return [
            "Top 10 cities by sales",
            "Cities with lowest performance",
            "New York vs Los Angeles sales",
            "City improvement opportunities",
            "Urban vs rural performance",
        ]
    if 'product' in q:
        return [
            "Best selling products",
            "Worst performing products",
            "Product category analysis",
            "Furniture vs Technology sales",
            "Product improvement recommendations",
        ]
    if params.get('state'):
        state = params['state']
        return [
            f"Compare {state} with other states",
            f"Least performing cities in {state}",
            f"{state} product categories",
            "Regional improvement analysis",
            "Market expansion opportunities",
        ]
    if params.get('category'):
        category = params['category']
        return [
            f"{category} top products",
            f"{category} underperformers",
            "Category comparison analysis",
            "Product line opportunities",
            "Category improvement strategies",
        ]
    return [
        "Show me all sales data",
        "Top 10 cities by revenue",
        "Least performing regions",
        "Best vs worst products",
        "Performance improvement opportunities",
    ]
