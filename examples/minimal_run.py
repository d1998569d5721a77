import embedcloud

# default dataset: 180 synthetic points in four clusters
result = embedcloud.run(count=180, out_dir="embedcloud_output", progress_report=True)
print(result["frame"].head())
print(result["meta"])

# any loosely-structured table works the same way
tsv = "name\tumap1\tumap2\tumap3\tcategory\nalpha\t0.1\t0.2\t0.3\tred\nbeta\t0.4\t0.5\t0.6\tblue\n"
for p in embedcloud.parse_table(tsv):
    print(embedcloud.format_tooltip(p), p.label, p.cluster)
