# mock_data.py
# Static dashboard content. Breadth, chart and insights have no live source yet.

from capitalflow.core.models import BlogPost, BreadthCounts, ChartData, ChartDataset, NewsItem

MOCK_BREADTH = BreadthCounts(advancing=2500, declining=500, unchanged=100)

MOCK_CHART = ChartData(
    labels=["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul"],
    datasets=[
        ChartDataset(
            label="Market Performance (%)",
            data=[0, 2.5, 1.8, 5.2, 4.1, 7.5, 6.9],
        )
    ],
)

MOCK_NEWS = [
    NewsItem(title="Global Markets Rebound as Inflation Fears Ease"),
    NewsItem(title="Tech Giants Announce Record-Breaking Q2 Earnings"),
    NewsItem(title="Central Bank Holds Rates Amidst Economic Uncertainty"),
    NewsItem(title="Supply Chain Disruptions Continue to Impact Manufacturing"),
    NewsItem(title="New Regulations Spark Debate in the Financial Sector"),
]

MOCK_BLOGS = [
    BlogPost(title="The Future of Fintech: A Comprehensive Analysis", author="By Jane Doe"),
    BlogPost(title="Navigating Volatility: A Guide for Long-Term Investors", author="By John Smith"),
    BlogPost(title="Decoding Economic Indicators: What You Need to Know", author="By The CapitalFlow Team"),
]
