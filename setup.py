"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='tarry',
	version='0.1.0',
	packages=['tarry', ],
	entry_points={
		'console_scripts': ["tarry = tarry.cmdline:main"],
	},
	license='MIT',
	description='Lazy, memoizing, persistent sequences and friends, with trampolines for the deep parts',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.9",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Topic :: Software Development :: Libraries",
		"Environment :: Console",
	],
	python_requires='>=3.9',
	install_requires=[
		"booze-tools>=0.6.2.1",
	]
)
