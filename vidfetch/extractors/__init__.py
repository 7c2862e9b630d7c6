"""Site extractors and the data types they return."""