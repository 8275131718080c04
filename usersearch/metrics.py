from prometheus_client import Counter, Histogram

search_queries = Counter("search_queries_total", "Total number of search queries", ["source", "status"])
search_results_returned = Histogram("search_results_returned", "Number of results returned per search query", ["source", "status"])
search_request_latency = Histogram("search_request_latency_seconds", "Search request round trip latency in seconds", ["source"])
